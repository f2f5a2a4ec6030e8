"""
Referral system configuration.

Contains constants and configuration for the referral system.
"""

from refnet.config.reward_tables import DEFAULT_COMMISSION_SCHEDULE

# 3-level referral program: 16% / 3% / 2% of each deposit
REFERRAL_DEPTH = DEFAULT_COMMISSION_SCHEDULE.depth

# Number of rewards shown in a user overview
RECENT_REWARDS_LIMIT = 50
