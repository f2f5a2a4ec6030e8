"""Unit tests for settings and referral links."""

import string
from decimal import Decimal

import pytest
from pydantic import ValidationError

from refnet.config.settings import Settings
from refnet.services.referral.links import (
    build_referral_link,
    generate_referral_code,
)


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self):
        """Reward defaults match the business rules."""
        cfg = Settings(_env_file=None)
        assert cfg.vip_promotion_threshold == Decimal("100")
        assert cfg.bonus_window_hours == 24
        assert cfg.atomic_deposits is True
        assert cfg.referral_code_length == 8

    def test_log_level_normalized(self):
        """Log level is upper-cased."""
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_debug_forbidden_in_production(self):
        """Production cannot run in debug mode."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="production", debug=True)

    @pytest.mark.parametrize("hours", [0, -1])
    def test_window_must_be_positive(self, hours):
        """Bonus window is at least one hour."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, bonus_window_hours=hours)


class TestReferralLinks:
    """Tests for referral codes and links."""

    def test_code_length_and_alphabet(self):
        """Codes are upper-case alphanumeric."""
        code = generate_referral_code(10)
        assert len(code) == 10
        assert set(code) <= set(string.ascii_uppercase + string.digits)

    def test_default_length_from_settings(self):
        """No length means the configured length."""
        assert len(generate_referral_code()) == 8

    @pytest.mark.parametrize("length", [0, -4])
    def test_non_positive_length_rejected(self, length):
        """Zero is not silently replaced by the default."""
        with pytest.raises(ValueError):
            generate_referral_code(length)

    def test_codes_differ(self):
        """Codes are random."""
        codes = {generate_referral_code(12) for _ in range(20)}
        assert len(codes) == 20

    def test_link_with_trailing_slash(self):
        """Base URL with trailing slash."""
        assert (
            build_referral_link("ABC123", "https://example.com/")
            == "https://example.com/?ref=ABC123"
        )

    def test_link_without_trailing_slash(self):
        """Missing trailing slash is added."""
        assert (
            build_referral_link("ABC123", "https://example.com")
            == "https://example.com/?ref=ABC123"
        )
