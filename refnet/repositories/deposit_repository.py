"""
Deposit repository.

Data access layer for Deposit model.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.deposit import DEPOSIT_STATUS_COMPLETED, Deposit
from refnet.models.user import User
from refnet.repositories.base import BaseRepository


class DepositRepository(BaseRepository[Deposit]):
    """Deposit repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize deposit repository."""
        super().__init__(Deposit, session)

    async def get_by_user(self, user_id: int) -> list[Deposit]:
        """Get all deposits of a user, newest first."""
        stmt = (
            select(Deposit)
            .where(Deposit.user_id == user_id)
            .order_by(Deposit.created_at.desc(), Deposit.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_direct_team_deposits(
        self, referrer_id: int, since: datetime
    ) -> Decimal:
        """
        Sum completed deposits of a referrer's direct referees.

        Args:
            referrer_id: Referrer user ID
            since: Only deposits created strictly after this moment

        Returns:
            Total team volume
        """
        stmt = (
            select(func.coalesce(func.sum(Deposit.amount), Decimal("0")))
            .join(User, Deposit.user_id == User.id)
            .where(
                User.referrer_id == referrer_id,
                Deposit.status == DEPOSIT_STATUS_COMPLETED,
                Deposit.created_at > since,
            )
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar() or 0))
