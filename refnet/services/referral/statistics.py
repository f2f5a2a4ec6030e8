"""
Referral statistics module.

Per-user reporting: recent rewards and full-downline team figures.
Team figures here cover the whole recursive downline, unlike team bonuses
which only count direct referees.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.referral_reward import ReferralReward
from refnet.models.user import User
from refnet.repositories.referral_reward_repository import (
    ReferralRewardRepository,
)
from refnet.repositories.user_repository import UserRepository
from refnet.services.referral.config import RECENT_REWARDS_LIMIT
from refnet.services.referral.links import build_referral_link
from refnet.utils.db_decorators import raises_storage_error
from refnet.utils.exceptions import NotFoundError


@dataclass
class UserOverview:
    """Account summary of a user."""

    user: User
    rewards: list[ReferralReward] = field(default_factory=list)
    team_size: int = 0
    team_total: Decimal = Decimal("0")
    referral_link: str = ""


class ReferralStatisticsService:
    """Reporting queries over the referral network."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize statistics service."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.reward_repo = ReferralRewardRepository(session)

    @raises_storage_error
    async def get_user_overview(
        self, user_id: int, rewards_limit: int = RECENT_REWARDS_LIMIT
    ) -> UserOverview:
        """
        Get account summary for a user.

        Args:
            user_id: User ID
            rewards_limit: Number of recent rewards to include

        Returns:
            UserOverview with recent rewards, team size (downline members
            with VIP level >= 1) and team total (downline deposits)

        Raises:
            NotFoundError: User does not exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        rewards = await self.reward_repo.get_recent_by_user(
            user_id, limit=rewards_limit
        )
        team_size = await self.user_repo.count_downline(user_id, min_vip_level=1)
        team_total = await self.user_repo.sum_downline_deposits(user_id)

        return UserOverview(
            user=user,
            rewards=rewards,
            team_size=team_size,
            team_total=team_total,
            referral_link=build_referral_link(user.referral_code),
        )

    @raises_storage_error
    async def get_user_by_username(self, username: str) -> User:
        """
        Get user by username.

        Raises:
            NotFoundError: No user with this username
        """
        user = await self.user_repo.get_by_username(username)
        if user is None:
            raise NotFoundError(f"User {username!r} not found")
        return user
