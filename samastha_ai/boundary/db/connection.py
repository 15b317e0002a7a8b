"""
Database connection management.

Provides the SQLAlchemy engine and session factory for the knowledge store.

Dependencies: sqlalchemy, samastha_ai.configs
System role: Database connection lifecycle management
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from samastha_ai.configs.database import DatabaseSettings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE applies in SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_config: DatabaseSettings) -> Engine:
    """
    Create SQLAlchemy engine for the configured URL.

    SQLite engines share one connection across threads for in-memory URLs
    and enforce foreign keys on every connection. Other backends use the
    default QueuePool with pre-ping.

    Args:
        db_config: Database settings

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    if db_config.is_sqlite:
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in db_config.url or db_config.url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(db_config.url, echo=db_config.echo_sql, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        db_config.url,
        echo=db_config.echo_sql,
        pool_pre_ping=True,  # Verify connections before using
    )


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Create session factory for database operations.

    Sessions use autoflush=False for explicit transaction control and
    expire_on_commit=False so loaded rows stay readable after commit.

    Args:
        engine: Bound engine

    Returns:
        sessionmaker: Session factory
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
