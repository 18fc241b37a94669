"""
FastAPI dependencies.

The store, settings and identity provider are created by the
application factory and live on app.state; endpoints reach them
through these functions instead of module-level globals.
"""

from fastapi import Header, Request

from mini_ledger.config import Settings
from mini_ledger.store import LedgerStore


def get_store(request: Request) -> LedgerStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_caller_account(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    """Resolve the Authorization header to the caller's account id."""
    return request.app.state.identity_provider.resolve(authorization)
