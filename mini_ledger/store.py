"""
The ledger store handle.

A LedgerStore owns the engine (and so the connection pool) and
the session factory. It is built once at application startup,
handed to every service that needs the database, and disposed
at shutdown. Nothing else in the package creates engines.

Each request does its work inside session_scope(): one session,
one database transaction, committed on success and rolled back
on any error.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError
from sqlalchemy.orm import Session, sessionmaker

from mini_ledger.config import Settings
from mini_ledger.exceptions import BalanceConflictError, StorageUnavailableError
from mini_ledger.models.base import create_db_engine

logger = logging.getLogger(__name__)

# Errors that mean "the store is unreachable or too slow", as
# opposed to errors in what we asked it to do.
STORAGE_ERRORS = (OperationalError, InterfaceError, TimeoutError)

# SQLSTATE class 40 (deadlock detected, serialization failure): the
# server aborted the transaction and it can be run again.
ROLLBACK_SQLSTATE_CLASS = "40"


def is_transaction_rollback(error: Exception) -> bool:
    pgcode = getattr(getattr(error, "orig", None), "pgcode", None)
    return bool(pgcode) and pgcode.startswith(ROLLBACK_SQLSTATE_CLASS)


class LedgerStore:

    def __init__(self, database_url: str, timeout: float = 5.0):
        self.engine = create_db_engine(database_url, timeout)
        # autoflush=False means nothing reaches the database until
        # a service flushes explicitly. expire_on_commit=False keeps
        # attributes readable after commit, when responses are built.
        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerStore":
        return cls(settings.DATABASE_URL, timeout=settings.DB_TIMEOUT)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Run a unit of work in a single transaction.

        A transaction the server aborted to break a deadlock is
        re-raised as BalanceConflictError so the caller can retry it.
        Storage failures are re-raised as StorageUnavailableError
        carrying the driver's message; every other exception
        propagates unchanged after the rollback.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except STORAGE_ERRORS as e:
            session.rollback()
            if is_transaction_rollback(e):
                logger.info("Transaction rolled back by the server: %s", e.orig)
                raise BalanceConflictError() from e
            message = str(getattr(e, "orig", None) or e)
            logger.error("Storage unavailable: %s", message)
            raise StorageUnavailableError(message) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except STORAGE_ERRORS:
            logger.warning("Database ping failed", exc_info=True)
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
