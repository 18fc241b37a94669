"""
Pydantic schemas for account creation and login.

Request fields are optional at the schema level so that a
missing field is reported by the service with the ledger's own
message instead of a generic validation error.
"""

from mini_ledger.schemas.common import CamelModel


class AccountCreate(CamelModel):
    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginRequest(CamelModel):
    username: str | None = None
    password: str | None = None


class AccountView(CamelModel):
    """Public view of an account. The password hash never leaves the service."""
    account_id: str
    username: str
    email: str
    account_balance: str
