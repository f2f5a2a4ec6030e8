"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from refnet.models.base import Base
from refnet.models.deposit import DEPOSIT_STATUS_COMPLETED, Deposit
from refnet.models.referral_reward import ReferralReward
from refnet.models.team_bonus import TeamBonus
from refnet.models.user import User


__all__ = [
    "Base",
    "DEPOSIT_STATUS_COMPLETED",
    "Deposit",
    "ReferralReward",
    "TeamBonus",
    "User",
]
