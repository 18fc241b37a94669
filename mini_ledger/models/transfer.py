"""
Transfer model.

The transfer_id is derived from the ordered account pair
("{from_account}-{to_account}"), so the table holds at most one
row per pair: a repeated transfer between the same two accounts
replaces the amount and timestamp of the existing row. The
row therefore summarises the latest transfer for the pair rather
than the full history.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from mini_ledger.models.base import Base, utcnow


def make_transfer_id(from_account: str, to_account: str) -> str:
    return f"{from_account}-{to_account}"


class Transfer(Base):
    __tablename__ = "transfers"

    id: Mapped[int] = mapped_column(primary_key=True)
    transfer_id: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    from_account: Mapped[str] = mapped_column(
        ForeignKey("accounts.account_id"), nullable=False, index=True
    )
    to_account: Mapped[str] = mapped_column(
        ForeignKey("accounts.account_id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Transfer {self.transfer_id} {self.amount}>"
