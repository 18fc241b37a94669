"""
Pydantic schemas for the login view.
"""

from datetime import datetime

from mini_ledger.schemas.account import AccountView
from mini_ledger.schemas.common import CamelModel


class CreditEntry(CamelModel):
    amount: str
    created_at: datetime
    funding_id: str


class DebitEntry(CamelModel):
    amount: str
    created_at: datetime
    withdrawal_id: str


class TransferEntry(CamelModel):
    amount: str
    created_at: datetime
    transfer_id: str
    to_account: str


class LoginView(CamelModel):
    """An account plus its history. The lists are empty, never null."""
    user: AccountView
    credits: list[CreditEntry]
    debits: list[DebitEntry]
    transfers: list[TransferEntry]
