"""
Team bonus evaluator.

Decides which team volume tiers a referrer has newly reached inside the
rolling window. Reads the store only; paying out is the deposit
processor's job.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loguru import logger

from refnet.config.reward_tables import (
    DEFAULT_TEAM_BONUS_SCHEDULE,
    TeamBonusSchedule,
    quantize_money,
)
from refnet.services.ledger import LedgerStore


@dataclass(frozen=True, slots=True)
class QualifiedBonus:
    """A tier that is payable now."""

    threshold: Decimal
    reward_amount: Decimal


class TeamBonusEvaluator:
    """Evaluates direct-team volume against bonus tiers."""

    def __init__(
        self,
        ledger: LedgerStore,
        schedule: TeamBonusSchedule = DEFAULT_TEAM_BONUS_SCHEDULE,
    ) -> None:
        """
        Initialize evaluator.

        Args:
            ledger: Ledger store
            schedule: Bonus tiers and rolling window
        """
        self.ledger = ledger
        self.schedule = schedule

    def window_start(self, as_of: datetime) -> datetime:
        """Start of the rolling window ending at as_of (exclusive)."""
        return as_of - self.schedule.window

    async def team_volume(self, referrer_id: int, as_of: datetime) -> Decimal:
        """
        Sum deposits of direct referees inside the window.

        Args:
            referrer_id: Referrer user ID
            as_of: Window end

        Returns:
            Team volume
        """
        return await self.ledger.sum_direct_team_deposits(
            referrer_id, self.window_start(as_of)
        )

    async def evaluate(
        self, referrer_id: int, as_of: datetime
    ) -> list[QualifiedBonus]:
        """
        Find tiers reached by the team and not yet granted in the window.

        Args:
            referrer_id: Referrer user ID
            as_of: Evaluation moment

        Returns:
            Qualified tiers, ascending by threshold
        """
        since = self.window_start(as_of)
        volume = await self.ledger.sum_direct_team_deposits(referrer_id, since)

        qualified = []
        for tier in sorted(self.schedule.tiers, key=lambda t: t.threshold):
            if volume < tier.threshold:
                continue
            if await self.ledger.bonus_already_granted(
                referrer_id, tier.threshold, since
            ):
                continue
            qualified.append(
                QualifiedBonus(
                    threshold=tier.threshold,
                    reward_amount=quantize_money(tier.reward),
                )
            )

        logger.debug(
            "Team bonus evaluated",
            extra={
                "referrer_id": referrer_id,
                "team_volume": str(volume),
                "qualified": [str(b.threshold) for b in qualified],
            },
        )
        return qualified
