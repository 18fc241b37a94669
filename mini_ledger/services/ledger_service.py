"""
Ledger service: the storage contract of the ledger.

This service is the only code that reads or writes the account
and log tables. It enforces the storage-level rules:
1. Account ids, usernames and emails are unique
2. A balance is written only if it is non-negative
3. A balance is written only if the account has not changed
   since it was read (compare-and-swap on the version column)
4. Funding and withdrawal logs are append-only

The service takes a session as a constructor argument, so the
caller owns the transaction boundary. All business decisions
(is the amount valid, is there enough money) live in the
services above it.
"""

import logging
import secrets
import string
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mini_ledger.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    BalanceConflictError,
    InsufficientFundsError,
    StorageUnavailableError,
)
from mini_ledger.models import (
    Account,
    ACCOUNT_ID_LENGTH,
    Funding,
    Withdrawal,
    Transfer,
    make_transfer_id,
)
from mini_ledger.models.base import utcnow

logger = logging.getLogger(__name__)

ACCOUNT_ID_ALPHABET = string.ascii_letters + string.digits

# 62**6 ids make a collision unlikely; a handful of draws is plenty.
MAX_ID_ATTEMPTS = 5


def generate_account_id() -> str:
    return "".join(
        secrets.choice(ACCOUNT_ID_ALPHABET) for _ in range(ACCOUNT_ID_LENGTH)
    )


class LedgerService:

    def __init__(self, db: Session):
        self.db = db

    # --- Accounts ---

    def get_account(self, account_id: str) -> Account | None:
        return self.db.get(Account, account_id)

    def get_account_by_username(self, username: str) -> Account | None:
        return self.db.execute(
            select(Account).where(Account.username == username)
        ).scalar_one_or_none()

    def get_account_by_email(self, email: str) -> Account | None:
        return self.db.execute(
            select(Account).where(Account.email == email)
        ).scalar_one_or_none()

    def create_account(
        self, username: str, password_hash: str, email: str
    ) -> Account:
        """
        Insert a new account with a zero balance.

        Raises AccountExistsError if the email or username is
        taken, either by an existing row or by a concurrent
        insert that wins the unique constraint.
        """
        if self.get_account_by_email(email) or self.get_account_by_username(username):
            raise AccountExistsError()

        account_id = self._new_account_id()
        account = Account(
            account_id=account_id,
            username=username,
            password_hash=password_hash,
            email=email,
            balance=Decimal("0.00"),
            version=0,
        )
        self.db.add(account)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise AccountExistsError() from e
        return account

    def _new_account_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            account_id = generate_account_id()
            if self.db.get(Account, account_id) is None:
                return account_id
        raise StorageUnavailableError("Could not allocate a unique account id")

    def set_balance(
        self,
        account_id: str,
        new_balance: Decimal,
        expected_version: int | None = None,
    ) -> Account:
        """
        Write a new balance, optionally as a compare-and-swap.

        With expected_version, the UPDATE only matches if the row
        still carries that version; a miss means another writer
        got there first and BalanceConflictError is raised. The
        version is bumped on every successful write.
        """
        if new_balance < 0:
            raise InsufficientFundsError()

        stmt = update(Account).where(Account.account_id == account_id)
        if expected_version is not None:
            stmt = stmt.where(Account.version == expected_version)
        stmt = stmt.values(
            balance=new_balance,
            version=Account.version + 1,
        ).execution_options(synchronize_session=False)

        result = self.db.execute(stmt)
        account = self.db.get(Account, account_id)

        if result.rowcount == 0:
            if account is None:
                raise AccountNotFoundError()
            logger.info(
                "Balance write lost a race",
                extra={"account_id": account_id, "operation": "set_balance"},
            )
            raise BalanceConflictError()

        # The UPDATE bypassed the identity map; reload the row.
        self.db.refresh(account)
        return account

    # --- Transaction logs ---

    def append_funding(self, to_account: str, amount: Decimal) -> Funding:
        funding = Funding(to_account=to_account, amount=amount)
        self.db.add(funding)
        self.db.flush()
        return funding

    def append_withdrawal(self, from_account: str, amount: Decimal) -> Withdrawal:
        withdrawal = Withdrawal(from_account=from_account, amount=amount)
        self.db.add(withdrawal)
        self.db.flush()
        return withdrawal

    def append_transfer(
        self, from_account: str, to_account: str, amount: Decimal
    ) -> Transfer:
        """
        Record a transfer under its pair id "{from}-{to}".

        If a transfer for the same ordered pair already exists,
        its amount and timestamp are replaced. Two first-time
        transfers for a pair racing on the insert surface as
        BalanceConflictError so the loser is retried as an update.
        """
        transfer_id = make_transfer_id(from_account, to_account)
        transfer = self.db.execute(
            select(Transfer).where(Transfer.transfer_id == transfer_id)
        ).scalar_one_or_none()

        if transfer:
            transfer.amount = amount
            transfer.created_at = utcnow()
        else:
            transfer = Transfer(
                transfer_id=transfer_id,
                from_account=from_account,
                to_account=to_account,
                amount=amount,
            )
            self.db.add(transfer)

        try:
            self.db.flush()
        except IntegrityError as e:
            raise BalanceConflictError() from e
        return transfer

    def list_fundings_for(self, account_id: str) -> list[Funding]:
        """Return fundings credited to an account, oldest first."""
        fundings = self.db.execute(
            select(Funding)
            .where(Funding.to_account == account_id)
            .order_by(Funding.id)
        ).scalars().all()
        return list(fundings)

    def list_withdrawals_for(self, account_id: str) -> list[Withdrawal]:
        """Return withdrawals from an account, oldest first."""
        withdrawals = self.db.execute(
            select(Withdrawal)
            .where(Withdrawal.from_account == account_id)
            .order_by(Withdrawal.id)
        ).scalars().all()
        return list(withdrawals)

    def list_transfers_from(self, account_id: str) -> list[Transfer]:
        """Return transfers sent by an account, in first-seen pair order."""
        transfers = self.db.execute(
            select(Transfer)
            .where(Transfer.from_account == account_id)
            .order_by(Transfer.id)
        ).scalars().all()
        return list(transfers)
