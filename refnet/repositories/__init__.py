"""
Repositories package.

Data access layer, one repository per model.
"""

from refnet.repositories.base import BaseRepository
from refnet.repositories.deposit_repository import DepositRepository
from refnet.repositories.referral_reward_repository import (
    ReferralRewardRepository,
)
from refnet.repositories.team_bonus_repository import TeamBonusRepository
from refnet.repositories.user_repository import UserRepository


__all__ = [
    "BaseRepository",
    "DepositRepository",
    "ReferralRewardRepository",
    "TeamBonusRepository",
    "UserRepository",
]
