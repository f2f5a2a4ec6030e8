"""
Common validators for request input.

Each validator returns a tuple of (is_valid, parsed_value, error_message).
"""

from decimal import Decimal, InvalidOperation

from refnet.config.reward_tables import quantize_money


USERNAME_MAX_LENGTH = 255


def validate_user_id(value: object) -> tuple[bool, int | None, str | None]:
    """
    Validate user ID.

    Args:
        value: Integer or numeric string

    Returns:
        Tuple of (is_valid, parsed_user_id, error_message)

    Examples:
        >>> validate_user_id(42)
        (True, 42, None)
        >>> validate_user_id("abc")
        (False, None, 'User ID must be a positive integer')
    """
    if value is None or isinstance(value, bool):
        return False, None, "User ID is required"

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return False, None, "User ID is required"

    if not isinstance(value, (int, str)):
        return False, None, "User ID must be a positive integer"

    try:
        user_id = int(value)
    except ValueError:
        return False, None, "User ID must be a positive integer"

    if user_id <= 0:
        return False, None, "User ID must be a positive integer"

    return True, user_id, None


def validate_deposit_amount(
    value: object,
) -> tuple[bool, Decimal | None, str | None]:
    """
    Validate deposit amount and round it to ledger precision.

    Accepts Decimal, int, float or a numeric string. Comma is accepted as
    decimal separator in strings.

    Args:
        value: Raw amount

    Returns:
        Tuple of (is_valid, amount, error_message)

    Examples:
        >>> validate_deposit_amount("100.50")
        (True, Decimal('100.50'), None)
        >>> validate_deposit_amount(0)
        (False, None, 'Amount must be greater than 0')
    """
    if value is None or isinstance(value, bool):
        return False, None, "Amount is required"

    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return False, None, "Amount is required"
    elif isinstance(value, float):
        value = str(value)
    elif not isinstance(value, (int, Decimal)):
        return False, None, "Amount must be a number"

    try:
        amount = Decimal(value)
    except (InvalidOperation, ValueError):
        return False, None, "Invalid amount format"

    if not amount.is_finite():
        return False, None, "Amount must be a finite number"

    if amount <= 0:
        return False, None, "Amount must be greater than 0"

    amount = quantize_money(amount)
    if amount <= 0:
        return False, None, "Amount is below the minimum unit of 0.01"

    return True, amount, None


def validate_username(value: object) -> tuple[bool, str | None, str | None]:
    """
    Validate username for registration.

    Args:
        value: Raw username

    Returns:
        Tuple of (is_valid, stripped_username, error_message)
    """
    if not value or not isinstance(value, str):
        return False, None, "Username is required"

    username = value.strip()
    if not username:
        return False, None, "Username is required"

    if len(username) > USERNAME_MAX_LENGTH:
        return False, None, (
            f"Username must be at most {USERNAME_MAX_LENGTH} characters"
        )

    return True, username, None
