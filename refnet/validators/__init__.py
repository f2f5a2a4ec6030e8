"""
Validators package.

Provides common validation functions for request input.
"""

from refnet.validators.common import (
    validate_deposit_amount,
    validate_user_id,
    validate_username,
)


__all__ = [
    "validate_deposit_amount",
    "validate_user_id",
    "validate_username",
]
