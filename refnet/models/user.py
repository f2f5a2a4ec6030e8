"""
User model.

Represents a member of the referral network.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from refnet.models.base import Base
from refnet.models.types import MoneyType


class User(Base):
    """User model - referral network members."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "vip_level >= 0", name="check_user_vip_level_non_negative"
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    username: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False
    )
    referral_code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True
    )

    # Non-owning back-reference to the direct referrer
    referrer_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    balance: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    vip_level: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    referrer: Mapped[Optional["User"]] = relationship(
        "User",
        remote_side=[id],
        foreign_keys=[referrer_id],
        viewonly=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, username={self.username}, "
            f"referrer_id={self.referrer_id}, vip_level={self.vip_level})>"
        )
