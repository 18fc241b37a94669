"""
Transaction service: fund, withdraw and transfer.

Each operation:
1. Validates its input (amount parsed before any lookup)
2. Reads the accounts involved
3. Validates business rules (sufficient balance)
4. Writes the new balance(s) as compare-and-swap updates
5. Appends the log record
6. Commits, all inside one database transaction

If another request changes the same account between steps 2
and 4, the swap fails, the whole unit of work is rolled back,
and the operation starts again from step 2 with fresh balances.
No update is ever lost, and a transfer is never left with the
debit applied but not the credit.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Callable, TypeVar

from mini_ledger.exceptions import (
    AccountNotFoundError,
    BalanceConflictError,
    InsufficientFundsError,
    InvalidInputError,
)
from mini_ledger.schemas.common import CENT, format_amount
from mini_ledger.schemas.transaction import (
    FundingReceipt,
    WithdrawalReceipt,
    TransferReceipt,
)
from mini_ledger.services.ledger_service import LedgerService
from mini_ledger.store import LedgerStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

INVALID_AMOUNT = "amount must be a number greater than 0"

# Largest value a Numeric(15, 2) column holds
MAX_BALANCE = Decimal("9999999999999.99")

# Plain decimal notation, optionally with an exponent. Rules out the
# digit-group underscores Decimal would otherwise accept.
AMOUNT_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def is_missing(value) -> bool:
    return value is None or str(value).strip() == ""


def parse_amount(raw) -> Decimal:
    """
    Parse a textual amount into a positive two-decimal Decimal.

    Rejects non-numeric text, NaN and infinities, zero and
    negatives, more than two fractional digits, and values too
    large to store.
    """
    text = str(raw).strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        raise InvalidInputError(INVALID_AMOUNT)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidInputError(INVALID_AMOUNT)

    if not amount.is_finite() or amount <= 0:
        raise InvalidInputError(INVALID_AMOUNT)
    if amount > MAX_BALANCE:
        raise InvalidInputError("amount is too large")

    cents = amount.quantize(CENT)
    if cents != amount:
        raise InvalidInputError("amount must have at most 2 decimal places")
    return cents


class TransactionService:

    def __init__(self, store: LedgerStore, retry_limit: int = 10):
        self.store = store
        self.retry_limit = max(1, retry_limit)

    def _run_atomic(self, operation: str, work: Callable[[LedgerService], T]) -> T:
        """
        Run `work` in its own transaction, retrying on lost races.

        Only BalanceConflictError is retried. Business errors and
        storage errors propagate on the first occurrence.
        """
        for attempt in range(1, self.retry_limit + 1):
            try:
                with self.store.session_scope() as db:
                    return work(LedgerService(db))
            except BalanceConflictError:
                logger.info(
                    "Retrying %s after balance conflict (attempt %d/%d)",
                    operation, attempt, self.retry_limit,
                    extra={"operation": operation},
                )

        logger.warning(
            "Giving up on %s after %d balance conflicts",
            operation, self.retry_limit,
            extra={"operation": operation},
        )
        raise BalanceConflictError()

    def fund(self, to_account_id: str | None, amount) -> FundingReceipt:
        """Credit an account."""
        if is_missing(amount) or is_missing(to_account_id):
            raise InvalidInputError("amount and toAccount are required")
        value = parse_amount(amount)

        def work(ledger: LedgerService) -> FundingReceipt:
            account = ledger.get_account(to_account_id)
            if not account:
                raise AccountNotFoundError()

            new_balance = account.balance + value
            if new_balance > MAX_BALANCE:
                raise InvalidInputError("amount is too large")

            account = ledger.set_balance(
                account.account_id, new_balance, expected_version=account.version
            )
            funding = ledger.append_funding(account.account_id, value)

            return FundingReceipt(
                created_at=funding.created_at,
                funding_id=funding.funding_id,
                amount=format_amount(value),
                to_account=account.account_id,
                account_balance=format_amount(account.balance),
            )

        receipt = self._run_atomic("fund", work)
        logger.info(
            "Funded %s", receipt.amount,
            extra={"account_id": receipt.to_account, "operation": "fund"},
        )
        return receipt

    def withdraw(self, from_account_id: str | None, amount) -> WithdrawalReceipt:
        """Debit an account. Fails without side effects if funds are short."""
        if is_missing(amount) or is_missing(from_account_id):
            raise InvalidInputError("amount and fromAccount are required")
        value = parse_amount(amount)

        def work(ledger: LedgerService) -> WithdrawalReceipt:
            account = ledger.get_account(from_account_id)
            if not account:
                raise AccountNotFoundError()

            new_balance = account.balance - value
            if new_balance < 0:
                raise InsufficientFundsError()

            account = ledger.set_balance(
                account.account_id, new_balance, expected_version=account.version
            )
            withdrawal = ledger.append_withdrawal(account.account_id, value)

            return WithdrawalReceipt(
                created_at=withdrawal.created_at,
                withdrawal_id=withdrawal.withdrawal_id,
                amount=format_amount(value),
                from_account=account.account_id,
                account_balance=format_amount(account.balance),
            )

        receipt = self._run_atomic("withdraw", work)
        logger.info(
            "Withdrew %s", receipt.amount,
            extra={"account_id": receipt.from_account, "operation": "withdraw"},
        )
        return receipt

    def transfer(
        self,
        from_account_id: str | None,
        to_account_id: str | None,
        amount,
    ) -> TransferReceipt:
        """
        Move money from one account to another.

        The debit is written before the credit. Both writes and
        the transfer record share one transaction, so a failed
        credit rolls the debit back with it.
        """
        if is_missing(amount) or is_missing(from_account_id) or is_missing(to_account_id):
            raise InvalidInputError("amount, fromAccount and toAccount are required")
        value = parse_amount(amount)

        if from_account_id == to_account_id:
            raise InvalidInputError("Cannot transfer to the same account")

        def work(ledger: LedgerService) -> TransferReceipt:
            source = ledger.get_account(from_account_id)
            if not source:
                raise AccountNotFoundError("Account not found (Giver)")
            destination = ledger.get_account(to_account_id)
            if not destination:
                raise AccountNotFoundError("Account not found (Receiver)")

            debited = source.balance - value
            if debited < 0:
                raise InsufficientFundsError()
            credited = destination.balance + value
            if credited > MAX_BALANCE:
                raise InvalidInputError("amount is too large")

            source = ledger.set_balance(
                source.account_id, debited, expected_version=source.version
            )
            ledger.set_balance(
                destination.account_id, credited,
                expected_version=destination.version,
            )
            transfer = ledger.append_transfer(
                source.account_id, destination.account_id, value
            )

            return TransferReceipt(
                created_at=transfer.created_at,
                transfer_id=transfer.transfer_id,
                amount=format_amount(value),
                from_account=source.account_id,
                to_account=destination.account_id,
                account_balance=format_amount(source.balance),
            )

        receipt = self._run_atomic("transfer", work)
        logger.info(
            "Transferred %s to %s", receipt.amount, receipt.to_account,
            extra={"account_id": receipt.from_account, "operation": "transfer"},
        )
        return receipt
