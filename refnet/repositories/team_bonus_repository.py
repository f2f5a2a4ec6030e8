"""
TeamBonus repository.

Data access layer for TeamBonus model.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.team_bonus import TeamBonus
from refnet.repositories.base import BaseRepository


class TeamBonusRepository(BaseRepository[TeamBonus]):
    """Repository for team bonus ledger rows."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(TeamBonus, session)

    async def granted_since(
        self, user_id: int, threshold: Decimal, since: datetime
    ) -> bool:
        """
        Check whether a tier was already granted inside the window.

        Args:
            user_id: Beneficiary user ID
            threshold: Tier threshold (stored as team_total)
            since: Window start (exclusive)

        Returns:
            True if a matching bonus row exists
        """
        stmt = (
            select(TeamBonus.id)
            .where(
                and_(
                    TeamBonus.user_id == user_id,
                    TeamBonus.team_total == threshold,
                    TeamBonus.created_at > since,
                )
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_all_by_user(self, user_id: int) -> list[TeamBonus]:
        """Get all team bonuses of a user, newest first."""
        stmt = (
            select(TeamBonus)
            .where(TeamBonus.user_id == user_id)
            .order_by(TeamBonus.created_at.desc(), TeamBonus.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
