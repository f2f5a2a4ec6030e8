"""
Reward table configuration.

Commission rates per referral level and team bonus tiers. Tables are frozen
dataclasses handed to the calculators; the module-level defaults are
instances and are never mutated.
"""

from dataclasses import dataclass
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal


# Ledger precision: 2 decimal places
MONEY_QUANT = Decimal("0.01")
MONEY_ROUNDING = ROUND_HALF_EVEN

TEAM_BONUS_CATEGORY = "24h_bonus"


def quantize_money(amount: Decimal) -> Decimal:
    """
    Round amount to ledger precision.

    Args:
        amount: Raw amount

    Returns:
        Amount rounded half-even to 0.01
    """
    return amount.quantize(MONEY_QUANT, rounding=MONEY_ROUNDING)


@dataclass(frozen=True, slots=True)
class CommissionSchedule:
    """Commission rate per referral level (index 0 is level 1)."""

    rates: tuple[Decimal, ...]

    @property
    def depth(self) -> int:
        """Number of levels that earn a commission."""
        return len(self.rates)

    def rate_for(self, level: int) -> Decimal:
        """Rate for level, zero outside the table."""
        if 1 <= level <= len(self.rates):
            return self.rates[level - 1]
        return Decimal("0")


@dataclass(frozen=True, slots=True)
class BonusTier:
    """Team volume threshold and the bonus it pays."""

    threshold: Decimal
    reward: Decimal


@dataclass(frozen=True, slots=True)
class TeamBonusSchedule:
    """Team bonus tiers and the rolling window they are granted in."""

    tiers: tuple[BonusTier, ...]
    window: timedelta = timedelta(hours=24)
    category: str = TEAM_BONUS_CATEGORY

    def with_window(self, window: timedelta) -> "TeamBonusSchedule":
        """Copy of this schedule with another window."""
        return TeamBonusSchedule(
            tiers=self.tiers, window=window, category=self.category
        )


DEFAULT_COMMISSION_SCHEDULE = CommissionSchedule(
    rates=(
        Decimal("0.16"),  # level 1 (direct referrer)
        Decimal("0.03"),  # level 2
        Decimal("0.02"),  # level 3
    )
)

DEFAULT_TEAM_BONUS_SCHEDULE = TeamBonusSchedule(
    tiers=(
        BonusTier(threshold=Decimal("2000"), reward=Decimal("12")),
        BonusTier(threshold=Decimal("5000"), reward=Decimal("40")),
        BonusTier(threshold=Decimal("10000"), reward=Decimal("200")),
        BonusTier(threshold=Decimal("20000"), reward=Decimal("500")),
        BonusTier(threshold=Decimal("50000"), reward=Decimal("1000")),
        BonusTier(threshold=Decimal("100000"), reward=Decimal("2500")),
        BonusTier(threshold=Decimal("200000"), reward=Decimal("5500")),
    )
)
