"""
Commission calculator.

Turns a deposit amount and an ancestor chain into per-level commissions.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from refnet.config.reward_tables import (
    DEFAULT_COMMISSION_SCHEDULE,
    CommissionSchedule,
    quantize_money,
)
from refnet.services.referral.chain_walker import ChainLink


@dataclass(frozen=True, slots=True)
class Commission:
    """Commission owed to one ancestor."""

    ancestor_id: int
    level: int
    reward_amount: Decimal


class CommissionCalculator:
    """
    Pure commission calculation.

    Formula: amount * rate[level], rounded half-even to 0.01.
    """

    def __init__(
        self, schedule: CommissionSchedule = DEFAULT_COMMISSION_SCHEDULE
    ) -> None:
        """
        Initialize calculator.

        Args:
            schedule: Commission rates per level
        """
        self.schedule = schedule

    def calculate_level_reward(self, amount: Decimal, level: int) -> Decimal:
        """
        Calculate reward for a single level.

        Args:
            amount: Deposit amount
            level: Referral level (1-based)

        Returns:
            Rounded reward, 0 if level has no rate

        Example:
            >>> CommissionCalculator().calculate_level_reward(Decimal("1000"), 1)
            Decimal('160.00')
        """
        rate = self.schedule.rate_for(level)
        if rate <= 0 or amount <= 0:
            return Decimal("0")
        return quantize_money(amount * rate)

    def compute_commissions(
        self, amount: Decimal, chain: Iterable[ChainLink]
    ) -> list[Commission]:
        """
        Compute commissions for every ancestor in the chain.

        Args:
            amount: Deposit amount
            chain: Ancestors in level order

        Returns:
            Commissions in chain order, one per level with a rate. A reward
            that rounds to 0.00 is still reported.
        """
        commissions = []
        for link in chain:
            if self.schedule.rate_for(link.level) <= 0:
                continue
            reward = self.calculate_level_reward(amount, link.level)
            commissions.append(
                Commission(
                    ancestor_id=link.ancestor_id,
                    level=link.level,
                    reward_amount=reward,
                )
            )
        return commissions
