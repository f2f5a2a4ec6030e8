"""
refnet - referral network reward engine.

Records deposits and distributes multi-level referral commissions and team
volume bonuses.
"""

__version__ = "1.0.0"
