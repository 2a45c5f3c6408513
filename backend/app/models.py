from datetime import UTC, datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Player(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    handicap: Optional[int] = None
    charity: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False, index=True)
