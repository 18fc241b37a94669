"""
Account model.

An account is created once at signup and never deleted. Its
balance is the only field that changes afterwards, and every
change bumps `version` so that writers can detect a balance
that moved underneath them.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Integer, Numeric, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mini_ledger.models.base import Base, utcnow


ACCOUNT_ID_LENGTH = 6


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    account_id: Mapped[str] = mapped_column(
        String(ACCOUNT_ID_LENGTH), primary_key=True
    )
    username: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
    )
    # Compare-and-swap token for balance writes
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_id} {self.username} ({self.balance})>"
