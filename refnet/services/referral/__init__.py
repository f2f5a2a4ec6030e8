"""
Referral services package.

Contains modular services for referral processing:
- config: Configuration constants (REFERRAL_DEPTH)
- chain_walker: Walks the referrer chain of a user
- commission_calculator: Per-level commission amounts
- links: Referral codes and links
- statistics: Per-user reporting
"""

from refnet.services.referral.chain_walker import ChainLink, ReferralChainWalker
from refnet.services.referral.commission_calculator import (
    Commission,
    CommissionCalculator,
)
from refnet.services.referral.config import REFERRAL_DEPTH
from refnet.services.referral.links import (
    build_referral_link,
    generate_referral_code,
)
from refnet.services.referral.statistics import (
    ReferralStatisticsService,
    UserOverview,
)


__all__ = [
    # Configuration
    "REFERRAL_DEPTH",
    # Chain and commissions
    "ChainLink",
    "Commission",
    "CommissionCalculator",
    "ReferralChainWalker",
    # Links
    "build_referral_link",
    "generate_referral_code",
    # Reporting
    "ReferralStatisticsService",
    "UserOverview",
]
