"""
Shared test fixtures.

Each test gets its own SQLite database file under tmp_path, so
tests never touch a real database and never see each other's
data. A file (not :memory:) is used so that several threads can
open their own connections, which the concurrency tests need.
"""

import pytest
from fastapi.testclient import TestClient

from mini_ledger.bootstrap import bootstrap_schema
from mini_ledger.config import Settings
from mini_ledger.main import create_app
from mini_ledger.services.account_service import AccountService
from mini_ledger.services.transaction_service import TransactionService
from mini_ledger.store import LedgerStore


@pytest.fixture
def settings(tmp_path):
    """Settings pointed at a throwaway database, with fast hashing."""
    settings = Settings()
    settings.DATABASE_URL = f"sqlite:///{tmp_path / 'ledger.db'}"
    settings.DB_TIMEOUT = 10.0
    settings.BCRYPT_ROUNDS = 4
    settings.BALANCE_RETRY_LIMIT = 10
    settings.API_PREFIX = "/api/v1/user/account"
    settings.LOG_LEVEL = "WARNING"
    return settings


@pytest.fixture
def store(settings):
    """A ledger store with the schema created, disposed after the test."""
    store = LedgerStore.from_settings(settings)
    bootstrap_schema(store.engine)
    yield store
    store.dispose()


@pytest.fixture
def account_service(store, settings):
    return AccountService(store, bcrypt_rounds=settings.BCRYPT_ROUNDS)


@pytest.fixture
def transaction_service(store, settings):
    return TransactionService(store, retry_limit=settings.BALANCE_RETRY_LIMIT)


@pytest.fixture
def client(settings, store):
    """
    Provide a test client bound to the test store.

    The with-block runs the application lifespan, which is where
    the app attaches the store and bootstraps the schema.
    """
    app = create_app(settings=settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api(settings):
    """Base path of the account endpoints."""
    return settings.API_PREFIX
