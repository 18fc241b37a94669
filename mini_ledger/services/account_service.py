"""
Account service: signup and credential checks.

Creating an account hashes the password, allocates a fresh
6-character id and stores the account with a zero balance.
Authentication looks the account up by username and verifies
the password against the stored bcrypt hash.
"""

import logging

from mini_ledger.exceptions import (
    AccountNotFoundError,
    InvalidInputError,
    UnauthorizedError,
)
from mini_ledger.models.account import Account
from mini_ledger.schemas.account import AccountView
from mini_ledger.schemas.common import format_amount
from mini_ledger.security import hash_password, verify_password
from mini_ledger.services.ledger_service import LedgerService
from mini_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


def to_account_view(account: Account) -> AccountView:
    return AccountView(
        account_id=account.account_id,
        username=account.username,
        email=account.email,
        account_balance=format_amount(account.balance),
    )


class AccountService:

    def __init__(self, store: LedgerStore, bcrypt_rounds: int = 10):
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    def create_account(
        self,
        username: str | None,
        password: str | None,
        email: str | None,
    ) -> AccountView:
        """
        Create a new account.

        Raises InvalidInputError if any field is empty and
        AccountExistsError if the email or username is taken.
        """
        if not username or not password or not email:
            raise InvalidInputError("username, password and email are required")

        password_hash = hash_password(password, self.bcrypt_rounds)

        with self.store.session_scope() as db:
            account = LedgerService(db).create_account(
                username=username,
                password_hash=password_hash,
                email=email,
            )
            view = to_account_view(account)

        logger.info(
            "Account created",
            extra={"account_id": view.account_id, "operation": "create"},
        )
        return view

    def get_account(self, account_id: str) -> AccountView:
        """Get an account by id."""
        with self.store.session_scope() as db:
            account = LedgerService(db).get_account(account_id)
        if not account:
            raise AccountNotFoundError()
        return to_account_view(account)

    def authenticate(self, username: str | None, password: str | None) -> Account:
        """
        Check a username and password.

        Returns the account, balance included, on success.
        """
        if not username or not password:
            raise InvalidInputError("username and password are required")

        with self.store.session_scope() as db:
            account = LedgerService(db).get_account_by_username(username)

        if not account:
            raise AccountNotFoundError()

        if not verify_password(password, account.password_hash):
            logger.info(
                "Login rejected: invalid password",
                extra={"account_id": account.account_id, "operation": "login"},
            )
            raise UnauthorizedError("Invalid password")

        return account
