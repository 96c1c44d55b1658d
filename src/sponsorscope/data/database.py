"""
Database engine and session management.

Supports PostgreSQL (hosted register) and SQLite (development) via DATABASE_URL.
Uses SQLAlchemy with connection pooling and health checks.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, DeclarativeBase
from sqlalchemy.pool import StaticPool

from sponsorscope.config import settings
from sponsorscope.logging_config import get_logger
from sponsorscope.exceptions import StoreConnectionError

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def _is_sqlite(url: str) -> bool:
    """Check if the database URL is SQLite."""
    return url.startswith("sqlite")


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Create a SQLAlchemy engine based on the database URL.

    Args:
        database_url: Override the URL from settings. Useful for testing.

    Returns:
        SQLAlchemy Engine instance

    Raises:
        StoreConnectionError: if the database does not answer ``SELECT 1``.
    """
    url = database_url or settings.database.url
    logger.info("Creating database engine — %s", "SQLite" if _is_sqlite(url) else "PostgreSQL")

    try:
        if _is_sqlite(url):
            engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=False,
            )
        else:
            engine = create_engine(
                url,
                pool_size=5,
                max_overflow=10,
                pool_pre_ping=True,
                echo=False,
            )

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified successfully")

        return engine

    except Exception as e:
        raise StoreConnectionError(
            message=f"Failed to connect to database: {e}",
            details={"url": url.split("@")[-1] if "@" in url else url},  # Hide credentials
        ) from e


def create_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """
    Create a session factory bound to the given engine.

    Args:
        engine: SQLAlchemy engine. If None, creates one from settings.
    """
    if engine is None:
        engine = create_db_engine()
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(engine: Engine | None = None) -> None:
    """
    Initialize the database — create the register table if missing.

    Args:
        engine: SQLAlchemy engine. If None, creates one from settings.
    """
    if engine is None:
        engine = create_db_engine()

    # Import models so they register with Base.metadata
    import sponsorscope.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")
