from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import get_settings
from app import models  # noqa: F401 - ensures models are registered with metadata

settings = get_settings()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Engine for the players database; SQLite needs cross-thread access under FastAPI."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=echo, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.database_url, echo=settings.debug)


def init_db(bind: Engine | None = None) -> None:
    """Create tables; called during startup and by the CLI."""
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """Yield a session for dependency injection."""
    with Session(engine) as session:
        yield session
