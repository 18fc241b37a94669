"""
Funding model.

One row per successful fund operation. Rows are append-only:
never updated, never deleted.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from mini_ledger.models.base import Base, utcnow


class Funding(Base):
    __tablename__ = "fundings"

    # Surrogate key, also the insertion order for history listings
    id: Mapped[int] = mapped_column(primary_key=True)
    funding_id: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False,
        default=lambda: str(uuid.uuid4()),
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
        return f"<Funding {self.funding_id} {self.amount} -> {self.to_account}>"
