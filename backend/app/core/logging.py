import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger; safe to call repeatedly."""
    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, "_ginvitational", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ginvitational = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    # SQL echo is controlled by DEBUG on the engine, not by the app log level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
