"""
ReferralReward model.

Ledger row for a commission paid to an ancestor of a depositor.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from refnet.models.base import Base
from refnet.models.types import MoneyType


class ReferralReward(Base):
    """
    ReferralReward entity.

    One row per (beneficiary, deposit, level).

    Attributes:
        id: Primary key
        user_id: Beneficiary (the ancestor that was paid)
        referred_user_id: Depositor whose deposit triggered the reward
        deposit_id: Triggering deposit
        reward_amount: Commission amount
        reward_level: Distance from depositor to beneficiary (1-3)
        created_at: When the reward was paid
    """

    __tablename__ = "referral_rewards"
    __table_args__ = (
        CheckConstraint(
            "reward_level >= 1", name="check_referral_reward_level_positive"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    referred_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    deposit_id: Mapped[int] = mapped_column(
        ForeignKey("deposits.id", ondelete="CASCADE"), nullable=False
    )

    reward_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    reward_level: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ReferralReward(id={self.id}, user_id={self.user_id}, "
            f"deposit_id={self.deposit_id}, level={self.reward_level}, "
            f"amount={self.reward_amount})>"
        )
