"""
Deposit processor.

Records a deposit and distributes everything it triggers: the depositor's
balance credit and VIP promotion, multi-level referral commissions and team
volume bonuses for the direct referrer.

Processing states, in order:
    RECEIVED -> RECORDED -> CREDITED -> REWARDS_DISTRIBUTED
    -> BONUSES_EVALUATED -> COMPLETED

With atomic processing (default) the whole sequence is one transaction,
committed at COMPLETED and rolled back on any failure. Without it every
state is committed as soon as it is reached, and a failure leaves the
earlier states committed.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from refnet.config.reward_tables import (
    DEFAULT_COMMISSION_SCHEDULE,
    DEFAULT_TEAM_BONUS_SCHEDULE,
    CommissionSchedule,
    TeamBonusSchedule,
)
from refnet.config.settings import settings
from refnet.models.deposit import Deposit
from refnet.models.user import User
from refnet.services.ledger import LedgerStore
from refnet.services.referral.chain_walker import ReferralChainWalker
from refnet.services.referral.commission_calculator import (
    Commission,
    CommissionCalculator,
)
from refnet.services.team_bonus.evaluator import (
    QualifiedBonus,
    TeamBonusEvaluator,
)
from refnet.utils.datetime_utils import utc_now
from refnet.utils.exceptions import (
    NotFoundError,
    StorageError,
    ValidationError,
)
from refnet.validators.common import validate_deposit_amount, validate_user_id


VIP_LEVEL_NONE = 0
VIP_LEVEL_FIRST = 1


class DepositState(str, Enum):
    """Deposit processing states."""

    RECEIVED = "received"
    RECORDED = "recorded"
    CREDITED = "credited"
    REWARDS_DISTRIBUTED = "rewards_distributed"
    BONUSES_EVALUATED = "bonuses_evaluated"
    COMPLETED = "completed"


@dataclass
class DepositResult:
    """Result of deposit processing."""

    deposit: Deposit
    rewards_applied: list[Commission] = field(default_factory=list)
    bonuses_applied: list[QualifiedBonus] = field(default_factory=list)
    bonus_beneficiary_id: int | None = None
    vip_promoted: bool = False
    state: DepositState = DepositState.COMPLETED

    @property
    def total_rewards(self) -> Decimal:
        """Sum of commissions paid."""
        return sum(
            (r.reward_amount for r in self.rewards_applied), Decimal("0")
        )

    def to_dict(self) -> dict[str, Any]:
        """Success payload for the request layer."""
        return {
            "deposit": {
                "id": self.deposit.id,
                "user_id": self.deposit.user_id,
                "amount": str(self.deposit.amount),
                "status": self.deposit.status,
                "created_at": self.deposit.created_at.isoformat(),
            },
            "rewards": [
                {
                    "referrer_id": r.ancestor_id,
                    "level": r.level,
                    "amount": str(r.reward_amount),
                }
                for r in self.rewards_applied
            ],
            "team_bonuses": [
                {
                    "referrer_id": self.bonus_beneficiary_id,
                    "threshold": str(b.threshold),
                    "amount": str(b.reward_amount),
                }
                for b in self.bonuses_applied
            ],
        }


class DepositProcessor:
    """
    Orchestrates reward distribution for a single deposit.

    One processor per session; the session must not be shared between
    concurrent deposits and must be created with expire_on_commit=False
    (see refnet.database).
    """

    def __init__(
        self,
        session: AsyncSession,
        commission_schedule: CommissionSchedule = DEFAULT_COMMISSION_SCHEDULE,
        bonus_schedule: TeamBonusSchedule | None = None,
        vip_threshold: Decimal | None = None,
        atomic: bool | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize deposit processor.

        Args:
            session: Async database session
            commission_schedule: Commission rates per level
            bonus_schedule: Team bonus tiers (window from settings if None)
            vip_threshold: Deposit promoting VIP 0 to 1 (settings if None)
            atomic: Single transaction per deposit (settings if None)
            clock: Source of the current time
        """
        if bonus_schedule is None:
            bonus_schedule = DEFAULT_TEAM_BONUS_SCHEDULE.with_window(
                timedelta(hours=settings.bonus_window_hours)
            )

        self.session = session
        self.ledger = LedgerStore(session)
        self.chain_walker = ReferralChainWalker(
            self.ledger, depth=commission_schedule.depth
        )
        self.calculator = CommissionCalculator(commission_schedule)
        self.bonus_evaluator = TeamBonusEvaluator(self.ledger, bonus_schedule)
        self.bonus_schedule = bonus_schedule
        self.vip_threshold = (
            vip_threshold
            if vip_threshold is not None
            else settings.vip_promotion_threshold
        )
        self.atomic = settings.atomic_deposits if atomic is None else atomic
        self.clock = clock

    async def process_deposit(
        self, user_id: object, amount: object
    ) -> DepositResult:
        """
        Record a deposit and distribute its rewards.

        Args:
            user_id: Depositor user ID
            amount: Deposit amount (positive)

        Returns:
            DepositResult with the deposit and all rewards applied

        Raises:
            ValidationError: Malformed user ID or amount
            NotFoundError: Depositor does not exist
            StorageError: Ledger store failure during processing
        """
        is_valid, parsed_user_id, error = validate_user_id(user_id)
        if not is_valid:
            logger.warning(
                "Deposit rejected: {}",
                error,
                extra={"user_id": repr(user_id)},
            )
            raise ValidationError(error)

        is_valid, parsed_amount, error = validate_deposit_amount(amount)
        if not is_valid:
            logger.warning(
                "Deposit rejected: {}",
                error,
                extra={"user_id": parsed_user_id, "amount": repr(amount)},
            )
            raise ValidationError(error)

        user = await self.ledger.get_user(parsed_user_id)
        if user is None:
            logger.warning(
                "Deposit rejected: user not found",
                extra={"user_id": parsed_user_id},
            )
            raise NotFoundError(f"User {parsed_user_id} not found")

        try:
            result = await self._distribute(user, parsed_amount)
        except Exception as e:
            await self._rollback_after(e, parsed_user_id)
            raise

        logger.info(
            "Deposit processed",
            extra={
                "user_id": parsed_user_id,
                "deposit_id": result.deposit.id,
                "amount": str(parsed_amount),
                "rewards_count": len(result.rewards_applied),
                "total_rewards": str(result.total_rewards),
                "bonuses_count": len(result.bonuses_applied),
                "state": result.state.value,
            },
        )
        return result

    async def _distribute(self, user: User, amount: Decimal) -> DepositResult:
        now = self.clock()
        # Snapshot before any update touches the identity map
        depositor_id = user.id
        referrer_id = user.referrer_id
        vip_level = user.vip_level

        deposit = await self.ledger.insert_deposit(depositor_id, amount, now)
        deposit_id = deposit.id
        await self._advance(DepositState.RECORDED, deposit_id)

        await self.ledger.credit_balance(depositor_id, amount)
        vip_promoted = False
        if vip_level == VIP_LEVEL_NONE and amount >= self.vip_threshold:
            await self.ledger.set_vip_level(depositor_id, VIP_LEVEL_FIRST)
            vip_promoted = True
        await self._advance(DepositState.CREDITED, deposit_id)

        chain = await self.chain_walker.get_chain(depositor_id)
        commissions = self.calculator.compute_commissions(amount, chain)
        for commission in commissions:
            await self.ledger.credit_balance(
                commission.ancestor_id, commission.reward_amount
            )
            await self.ledger.insert_referral_reward(
                beneficiary_id=commission.ancestor_id,
                referred_user_id=depositor_id,
                deposit_id=deposit_id,
                amount=commission.reward_amount,
                level=commission.level,
                created_at=now,
            )
            if not self.atomic:
                await self.ledger.commit()
            logger.info(
                "Referral deposit reward created",
                extra={
                    "referrer_id": commission.ancestor_id,
                    "referral_user_id": depositor_id,
                    "deposit_id": deposit_id,
                    "level": commission.level,
                    "amount": str(commission.reward_amount),
                },
            )
        await self._advance(DepositState.REWARDS_DISTRIBUTED, deposit_id)

        bonuses: list[QualifiedBonus] = []
        if referrer_id is not None:
            bonuses = await self._apply_team_bonuses(referrer_id, now)
        await self._advance(DepositState.BONUSES_EVALUATED, deposit_id)

        if self.atomic:
            await self.ledger.commit()
        await self._advance(DepositState.COMPLETED, deposit_id)

        return DepositResult(
            deposit=deposit,
            rewards_applied=commissions,
            bonuses_applied=bonuses,
            bonus_beneficiary_id=referrer_id if bonuses else None,
            vip_promoted=vip_promoted,
        )

    async def _apply_team_bonuses(
        self, referrer_id: int, now: datetime
    ) -> list[QualifiedBonus]:
        """Pay every tier the referrer's team newly reached."""
        # Serializes concurrent check-then-insert for the same referrer
        referrer = await self.ledger.lock_user(referrer_id)
        if referrer is None:
            return []

        bonuses = await self.bonus_evaluator.evaluate(referrer_id, now)
        for bonus in bonuses:
            await self.ledger.credit_balance(referrer_id, bonus.reward_amount)
            await self.ledger.insert_team_bonus(
                referrer_id=referrer_id,
                amount=bonus.reward_amount,
                team_total=bonus.threshold,
                category=self.bonus_schedule.category,
                created_at=now,
            )
            if not self.atomic:
                await self.ledger.commit()
            logger.info(
                "Team bonus granted",
                extra={
                    "referrer_id": referrer_id,
                    "threshold": str(bonus.threshold),
                    "amount": str(bonus.reward_amount),
                },
            )
        return bonuses

    async def _advance(self, state: DepositState, deposit_id: int) -> None:
        if not self.atomic and state is not DepositState.COMPLETED:
            await self.ledger.commit()
        logger.debug(
            "Deposit state changed",
            extra={"deposit_id": deposit_id, "state": state.value},
        )

    async def _rollback_after(self, error: Exception, user_id: int) -> None:
        logger.error(
            "Deposit processing failed: {}: {}",
            type(error).__name__,
            error,
            extra={"user_id": user_id, "atomic": self.atomic},
        )
        try:
            await self.ledger.rollback()
        except StorageError as rollback_error:
            logger.error("Failed to rollback deposit: {}", rollback_error)
