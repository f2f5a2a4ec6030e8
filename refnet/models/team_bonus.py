"""
TeamBonus model.

Ledger row for a team volume bonus. Also the de-duplication key for
bonus grants: (user_id, team_total, created_at inside the window).
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from refnet.models.base import Base
from refnet.models.types import MoneyType


class TeamBonus(Base):
    """TeamBonus entity. team_total holds the tier threshold crossed."""

    __tablename__ = "team_bonuses"
    __table_args__ = (
        Index("idx_team_bonuses_user_total", "user_id", "team_total"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bonus_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    team_total: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    bonus_type: Mapped[str] = mapped_column(String(50), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<TeamBonus(id={self.id}, user_id={self.user_id}, "
            f"team_total={self.team_total}, amount={self.bonus_amount})>"
        )
