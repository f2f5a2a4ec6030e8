"""Configuration: environment settings and reward tables."""

from refnet.config.reward_tables import (
    DEFAULT_COMMISSION_SCHEDULE,
    DEFAULT_TEAM_BONUS_SCHEDULE,
    BonusTier,
    CommissionSchedule,
    TeamBonusSchedule,
    quantize_money,
)
from refnet.config.settings import Settings, settings


__all__ = [
    "DEFAULT_COMMISSION_SCHEDULE",
    "DEFAULT_TEAM_BONUS_SCHEDULE",
    "BonusTier",
    "CommissionSchedule",
    "Settings",
    "TeamBonusSchedule",
    "quantize_money",
    "settings",
]
