"""
Database configuration and connection management.

Engine, session factory and request-scoped session dependency.
"""

import sqlite3
import time
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import settings
from .logging_config import get_logger
from .models import Base

logger = get_logger(__name__)


def _safe_url(db_url: str) -> str:
    """Strip credentials from a database URL for logging."""
    if "@" in db_url:
        return db_url.split("://")[0] + "://...@" + db_url.split("@", 1)[1]
    return db_url


def build_engine(db_url: str) -> Engine:
    """
    Create a SQLAlchemy engine with pool settings suited to the backend.

    Args:
        db_url: Database connection URL

    Returns:
        Configured engine
    """
    logger.info("Creating database engine", url=_safe_url(db_url))

    if db_url.startswith("sqlite"):
        in_memory = db_url in ("sqlite://", "sqlite:///:memory:")
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool if in_memory else None,
            echo=settings.DB_ECHO,
        )

    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
        echo=settings.DB_ECHO,
    )


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless asked per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Track query start time."""
    conn.info.setdefault("query_start_time", []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log slow queries."""
    total_time_ms = (time.time() - conn.info["query_start_time"].pop()) * 1000

    if total_time_ms > settings.SLOW_QUERY_THRESHOLD_MS:
        logger.warning(
            "Slow query detected",
            query_time_ms=round(total_time_ms, 2),
            statement=statement[:200],
        )


@event.listens_for(Engine, "handle_error")
def discard_failed_query_start(exception_context):
    """Drop the start time of a statement that raised before after_cursor_execute."""
    conn = exception_context.connection
    if conn is None or exception_context.statement is None:
        return
    started = conn.info.get("query_start_time")
    if started:
        started.pop()


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize database tables.

    Creates all tables on application startup; existing tables are left alone.
    """
    target = bind if bind is not None else engine
    logger.info("Initializing database tables")
    Base.metadata.create_all(bind=target, checkfirst=True)
    logger.info("Database initialized", tables=sorted(Base.metadata.tables.keys()))


def get_db() -> Generator[Session, None, None]:
    """
    Get database session for dependency injection.

    Yields:
        SQLAlchemy database session, closed when the request ends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database(db: Session) -> bool:
    """
    Check that the database answers a trivial query.

    Args:
        db: Database session

    Returns:
        True if the database is reachable, False otherwise
    """
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        return False


def get_db_stats() -> dict:
    """
    Get database connection pool statistics.

    Returns:
        Dict with pool statistics
    """
    pool = engine.pool

    if not isinstance(pool, QueuePool):
        return {"pool_class": type(pool).__name__}

    return {
        "pool_class": type(pool).__name__,
        "pool_size": pool.size(),
        "checked_out": pool.checkedout(),
        "overflow": pool.overflow(),
    }
