"""
ReferralReward repository.

Data access layer for ReferralReward model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.referral_reward import ReferralReward
from refnet.repositories.base import BaseRepository


class ReferralRewardRepository(BaseRepository[ReferralReward]):
    """Repository for referral reward ledger rows."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(ReferralReward, session)

    async def get_recent_by_user(
        self, user_id: int, limit: int = 50
    ) -> list[ReferralReward]:
        """
        Get most recent rewards paid to a user.

        Args:
            user_id: Beneficiary user ID
            limit: Max number of rows

        Returns:
            Rewards, newest first
        """
        stmt = (
            select(ReferralReward)
            .where(ReferralReward.user_id == user_id)
            .order_by(
                ReferralReward.created_at.desc(), ReferralReward.id.desc()
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_deposit(self, deposit_id: int) -> list[ReferralReward]:
        """Get rewards triggered by a deposit, ordered by level."""
        stmt = (
            select(ReferralReward)
            .where(ReferralReward.deposit_id == deposit_id)
            .order_by(ReferralReward.reward_level.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
