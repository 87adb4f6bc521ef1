import logging

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from recruitment.config import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> dict:
    """Connection options per backend. SQLite is used for local runs and tests."""
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees its own empty database.
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.database_url, **engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _register_models() -> None:
    import recruitment.models  # noqa: F401


def init_db() -> None:
    """Create every table on startup. Existing tables are never altered."""
    _register_models()
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise
    logger.info("Database ready (%d tables declared)", len(getattr(Base.metadata, "tables", {})))


def ensure_tables_exist() -> list[str]:
    """Create missing tables for an existing database. Returns the names created."""
    _register_models()
    try:
        before = set(inspect(engine).get_table_names())
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.exception("Table check failed: %s", e)
        raise
    created = sorted(set(Base.metadata.tables) - before)
    if created:
        logger.info("Created missing tables: %s", ", ".join(created))
    else:
        logger.info("Schema up to date; no tables created")
    return created
