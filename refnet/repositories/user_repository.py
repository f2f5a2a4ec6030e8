"""
User repository.

Data access layer for User model.
"""

from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.deposit import Deposit
from refnet.models.user import User
from refnet.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_referral_code(self, code: str) -> User | None:
        """
        Get user by referral code.

        Args:
            code: Referral code

        Returns:
            User or None if not found
        """
        return await self.get_by(referral_code=code)

    async def get_by_username(self, username: str) -> User | None:
        """
        Get user by username.

        Args:
            username: Username

        Returns:
            User or None if not found
        """
        return await self.get_by(username=username)

    async def credit_balance(self, user_id: int, delta: Decimal) -> bool:
        """
        Atomically add delta to a user's balance.

        Args:
            user_id: User ID
            delta: Amount to add

        Returns:
            True if a row was updated
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + delta)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def set_vip_level(self, user_id: int, level: int) -> bool:
        """
        Set VIP level, never lowering the current one.

        Args:
            user_id: User ID
            level: New VIP level

        Returns:
            True if a row was updated
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.vip_level < level)
            .values(vip_level=level)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    def _downline_cte(self, user_id: int):
        """Recursive CTE of the user and its full downline."""
        team = (
            select(User.id, User.vip_level)
            .where(User.id == user_id)
            .cte(name="team", recursive=True)
        )
        members = select(User.id, User.vip_level).join(
            team, User.referrer_id == team.c.id
        )
        return team.union_all(members)

    async def count_downline(self, user_id: int, min_vip_level: int = 1) -> int:
        """
        Count users in the full recursive downline.

        Args:
            user_id: Root user ID (not counted)
            min_vip_level: Minimum VIP level of counted members

        Returns:
            Number of downline members at or above min_vip_level
        """
        team = self._downline_cte(user_id)
        stmt = select(func.count()).select_from(team).where(
            team.c.vip_level >= min_vip_level,
            team.c.id != user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def sum_downline_deposits(self, user_id: int) -> Decimal:
        """
        Sum all deposits made by the full recursive downline.

        Args:
            user_id: Root user ID (own deposits excluded)

        Returns:
            Total deposited amount
        """
        team = self._downline_cte(user_id)
        member_ids = select(team.c.id).where(team.c.id != user_id)
        stmt = select(
            func.coalesce(func.sum(Deposit.amount), Decimal("0"))
        ).where(Deposit.user_id.in_(member_ids))
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar() or 0))
