"""
Ledger store.

Facade over the repositories exposing the store operations the reward
engine consumes. Every operation reports store failures as StorageError.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.deposit import DEPOSIT_STATUS_COMPLETED, Deposit
from refnet.models.referral_reward import ReferralReward
from refnet.models.team_bonus import TeamBonus
from refnet.models.user import User
from refnet.repositories.deposit_repository import DepositRepository
from refnet.repositories.referral_reward_repository import (
    ReferralRewardRepository,
)
from refnet.repositories.team_bonus_repository import TeamBonusRepository
from refnet.repositories.user_repository import UserRepository
from refnet.utils.db_decorators import raises_storage_error
from refnet.utils.exceptions import StorageError


class LedgerStore:
    """Store operations used by deposit processing, bound to one session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize ledger store."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.deposit_repo = DepositRepository(session)
        self.reward_repo = ReferralRewardRepository(session)
        self.bonus_repo = TeamBonusRepository(session)

    @raises_storage_error
    async def get_user(self, user_id: int) -> User | None:
        return await self.user_repo.get_by_id(user_id)

    @raises_storage_error
    async def lock_user(self, user_id: int) -> User | None:
        """Fetch a user with a row lock held until the transaction ends."""
        return await self.user_repo.get_by_id(user_id, for_update=True)

    @raises_storage_error
    async def get_user_by_referral_code(self, code: str) -> User | None:
        return await self.user_repo.get_by_referral_code(code)

    @raises_storage_error
    async def insert_deposit(
        self, user_id: int, amount: Decimal, created_at: datetime
    ) -> Deposit:
        return await self.deposit_repo.create(
            user_id=user_id,
            amount=amount,
            status=DEPOSIT_STATUS_COMPLETED,
            created_at=created_at,
        )

    @raises_storage_error
    async def credit_balance(self, user_id: int, delta: Decimal) -> None:
        if not await self.user_repo.credit_balance(user_id, delta):
            raise StorageError(f"User {user_id} vanished during balance credit")

    @raises_storage_error
    async def set_vip_level(self, user_id: int, level: int) -> None:
        await self.user_repo.set_vip_level(user_id, level)

    @raises_storage_error
    async def insert_referral_reward(
        self,
        beneficiary_id: int,
        referred_user_id: int,
        deposit_id: int,
        amount: Decimal,
        level: int,
        created_at: datetime,
    ) -> ReferralReward:
        return await self.reward_repo.create(
            user_id=beneficiary_id,
            referred_user_id=referred_user_id,
            deposit_id=deposit_id,
            reward_amount=amount,
            reward_level=level,
            created_at=created_at,
        )

    @raises_storage_error
    async def sum_direct_team_deposits(
        self, referrer_id: int, since: datetime
    ) -> Decimal:
        return await self.deposit_repo.sum_direct_team_deposits(
            referrer_id, since
        )

    @raises_storage_error
    async def bonus_already_granted(
        self, referrer_id: int, threshold: Decimal, since: datetime
    ) -> bool:
        return await self.bonus_repo.granted_since(
            referrer_id, threshold, since
        )

    @raises_storage_error
    async def insert_team_bonus(
        self,
        referrer_id: int,
        amount: Decimal,
        team_total: Decimal,
        category: str,
        created_at: datetime,
    ) -> TeamBonus:
        return await self.bonus_repo.create(
            user_id=referrer_id,
            bonus_amount=amount,
            team_total=team_total,
            bonus_type=category,
            created_at=created_at,
        )

    @raises_storage_error
    async def commit(self) -> None:
        await self.session.commit()

    @raises_storage_error
    async def rollback(self) -> None:
        await self.session.rollback()
