"""Business logic services."""

from mini_ledger.services.ledger_service import LedgerService
from mini_ledger.services.account_service import AccountService
from mini_ledger.services.transaction_service import TransactionService
from mini_ledger.services.session_service import SessionService

__all__ = ["LedgerService", "AccountService", "TransactionService", "SessionService"]
