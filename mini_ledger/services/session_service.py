"""
Session service: the login view.

Read-only: authenticates through the AccountService, then loads
the account's credits (fundings), debits (withdrawals) and
outgoing transfers.
"""

from mini_ledger.schemas.common import format_amount
from mini_ledger.schemas.session import (
    CreditEntry,
    DebitEntry,
    TransferEntry,
    LoginView,
)
from mini_ledger.services.account_service import AccountService, to_account_view
from mini_ledger.services.ledger_service import LedgerService
from mini_ledger.store import LedgerStore


class SessionService:

    def __init__(self, store: LedgerStore, accounts: AccountService):
        self.store = store
        self.accounts = accounts

    def login(self, username: str | None, password: str | None) -> LoginView:
        account = self.accounts.authenticate(username, password)

        with self.store.session_scope() as db:
            ledger = LedgerService(db)
            credits = [
                CreditEntry(
                    amount=format_amount(f.amount),
                    created_at=f.created_at,
                    funding_id=f.funding_id,
                )
                for f in ledger.list_fundings_for(account.account_id)
            ]
            debits = [
                DebitEntry(
                    amount=format_amount(w.amount),
                    created_at=w.created_at,
                    withdrawal_id=w.withdrawal_id,
                )
                for w in ledger.list_withdrawals_for(account.account_id)
            ]
            transfers = [
                TransferEntry(
                    amount=format_amount(t.amount),
                    created_at=t.created_at,
                    transfer_id=t.transfer_id,
                    to_account=t.to_account,
                )
                for t in ledger.list_transfers_from(account.account_id)
            ]

        return LoginView(
            user=to_account_view(account),
            credits=credits,
            debits=debits,
            transfers=transfers,
        )
