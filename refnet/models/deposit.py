"""
Deposit model.

Represents user deposits into the platform.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from refnet.models.base import Base
from refnet.models.types import MoneyType


DEPOSIT_STATUS_COMPLETED = "completed"


class Deposit(Base):
    """Deposit model - immutable once created."""

    __tablename__ = "deposits"
    __table_args__ = (
        CheckConstraint(
            "amount > 0", name="check_deposit_amount_positive"
        ),
        Index("idx_deposits_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEPOSIT_STATUS_COMPLETED
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Deposit(id={self.id}, user_id={self.user_id}, "
            f"amount={self.amount}, status={self.status})>"
        )
