"""
Referral code generation and referral links.
"""

import secrets
import string
from urllib.parse import quote

from refnet.config.settings import settings


REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_referral_code(length: int | None = None) -> str:
    """
    Generate a random upper-case alphanumeric referral code.

    Args:
        length: Code length (settings.referral_code_length if None)

    Returns:
        New referral code, not checked for uniqueness

    Raises:
        ValueError: length is not positive
    """
    if length is None:
        length = settings.referral_code_length
    if length < 1:
        raise ValueError(f"Referral code length must be positive, got {length}")
    return "".join(
        secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(length)
    )


def build_referral_link(code: str, base_url: str | None = None) -> str:
    """
    Build the shareable referral link for a code.

    Example:
        >>> build_referral_link("ABC123", "https://example.com/")
        'https://example.com/?ref=ABC123'
    """
    base = base_url or settings.referral_link_base_url
    if not base.endswith("/"):
        base += "/"
    return f"{base}?ref={quote(code)}"
