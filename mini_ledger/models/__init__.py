"""
Database models package.

All models must be imported here so that the schema bootstrap
finds every table through Base.metadata.
"""

from mini_ledger.models.base import Base
from mini_ledger.models.account import Account, ACCOUNT_ID_LENGTH
from mini_ledger.models.funding import Funding
from mini_ledger.models.withdrawal import Withdrawal
from mini_ledger.models.transfer import Transfer, make_transfer_id

__all__ = [
    "Base",
    "Account",
    "ACCOUNT_ID_LENGTH",
    "Funding",
    "Withdrawal",
    "Transfer",
    "make_transfer_id",
]
