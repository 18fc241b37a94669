"""
Pydantic schemas for fund, withdraw and transfer.

Amounts are accepted as text or as JSON numbers; the balance
engine parses them into Decimal itself.
"""

from datetime import datetime

from mini_ledger.schemas.common import CamelModel


Amount = str | int | float | None


# --- Request Schemas ---

class FundRequest(CamelModel):
    amount: Amount = None
    # Defaults to the caller's own account
    to_account: str | None = None


class WithdrawRequest(CamelModel):
    amount: Amount = None


class TransferRequest(CamelModel):
    to_account: str | None = None
    amount: Amount = None


# --- Response Schemas ---

class FundingReceipt(CamelModel):
    created_at: datetime
    funding_id: str
    amount: str
    to_account: str
    account_balance: str


class WithdrawalReceipt(CamelModel):
    created_at: datetime
    withdrawal_id: str
    amount: str
    from_account: str
    account_balance: str


class TransferReceipt(CamelModel):
    created_at: datetime
    transfer_id: str
    amount: str
    from_account: str
    to_account: str
    account_balance: str
