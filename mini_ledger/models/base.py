"""
Declarative base, engine construction, and shared column helpers.

Unlike a module-level engine, nothing here connects on import.
The engine is built by create_db_engine() when the LedgerStore
is constructed at application startup.
"""

from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase


# --- Base Model Class ---
# Every table (Account, Funding, Withdrawal, Transfer) inherits
# from this class. Base.metadata is what the schema bootstrap
# hands to create_all().
class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every created_at column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_db_engine(database_url: str, timeout: float) -> Engine:
    """
    Build an engine whose every wait is bounded by `timeout` seconds.

    pool_pre_ping=True tests connections before using them,
    which handles cases where the database restarted or a
    connection went stale.

    The per-backend connect arguments bound the remaining waits:
    SQLite's busy handler gives up after `timeout`, PostgreSQL
    refuses to connect or run a statement for longer than it.
    """
    url = make_url(database_url)
    backend = url.get_backend_name()

    connect_args = {}
    engine_kwargs = {"pool_pre_ping": True}

    if backend == "sqlite":
        connect_args = {"check_same_thread": False, "timeout": timeout}
        # In-memory databases use a single-connection pool that
        # has no checkout queue to time out on.
        if url.database not in (None, "", ":memory:"):
            engine_kwargs["pool_timeout"] = timeout
    else:
        engine_kwargs["pool_timeout"] = timeout
        if backend == "postgresql":
            connect_args = {
                "connect_timeout": max(1, int(timeout)),
                "options": f"-c statement_timeout={int(timeout * 1000)}",
            }

    return create_engine(url, connect_args=connect_args, **engine_kwargs)
