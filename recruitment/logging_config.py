import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that log every request/statement at INFO.
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "multipart", "python_multipart")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from recruitment.config import settings

        level = settings.log_level
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Send all records to stdout with one handler on the root logger."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    root.handlers.clear()
    root.addHandler(handler)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
