"""
Unit tests for team bonus evaluation.

Tests cover:
- Threshold matching
- Multiple tiers in one evaluation
- De-duplication inside the window
- Window boundaries passed to the store
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from refnet.config.reward_tables import BonusTier, TeamBonusSchedule
from refnet.services.team_bonus.evaluator import (
    QualifiedBonus,
    TeamBonusEvaluator,
)


AS_OF = datetime(2026, 3, 1, 18, 30, tzinfo=UTC)


@pytest.fixture
def evaluator(mock_ledger):
    """Evaluator with the default schedule."""
    return TeamBonusEvaluator(mock_ledger)


class TestEvaluate:
    """Test qualified tier selection."""

    @pytest.mark.asyncio
    async def test_below_first_threshold(self, evaluator, mock_ledger):
        """Volume under 2000 qualifies for nothing."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("1999.99")

        assert await evaluator.evaluate(1, AS_OF) == []
        mock_ledger.bonus_already_granted.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exact_threshold_qualifies(self, evaluator, mock_ledger):
        """Reaching a threshold exactly qualifies."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("2000")

        result = await evaluator.evaluate(1, AS_OF)

        assert result == [
            QualifiedBonus(threshold=Decimal("2000"), reward_amount=Decimal("12.00"))
        ]

    @pytest.mark.asyncio
    async def test_multiple_tiers(self, evaluator, mock_ledger):
        """Every crossed tier qualifies independently."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("12000")

        result = await evaluator.evaluate(1, AS_OF)

        assert [b.threshold for b in result] == [
            Decimal("2000"),
            Decimal("5000"),
            Decimal("10000"),
        ]
        assert sum(b.reward_amount for b in result) == Decimal("252")

    @pytest.mark.asyncio
    async def test_already_granted_tier_skipped(self, evaluator, mock_ledger):
        """Tiers granted inside the window are not repeated."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("6000")
        mock_ledger.bonus_already_granted.side_effect = (
            lambda referrer_id, threshold, since: threshold == Decimal("2000")
        )

        result = await evaluator.evaluate(1, AS_OF)

        assert result == [
            QualifiedBonus(threshold=Decimal("5000"), reward_amount=Decimal("40.00"))
        ]

    @pytest.mark.asyncio
    async def test_all_granted(self, evaluator, mock_ledger):
        """Nothing qualifies when every reached tier was granted."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("250000")
        mock_ledger.bonus_already_granted.return_value = True

        assert await evaluator.evaluate(1, AS_OF) == []
        assert mock_ledger.bonus_already_granted.await_count == 7

    @pytest.mark.asyncio
    async def test_window_start_passed_to_store(self, evaluator, mock_ledger):
        """Volume and de-duplication use as_of minus 24 hours."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("2000")

        await evaluator.evaluate(7, AS_OF)

        since = AS_OF - timedelta(hours=24)
        mock_ledger.sum_direct_team_deposits.assert_awaited_once_with(7, since)
        mock_ledger.bonus_already_granted.assert_awaited_once_with(
            7, Decimal("2000"), since
        )

    @pytest.mark.asyncio
    async def test_custom_schedule(self, mock_ledger):
        """Tiers and window come from the schedule."""
        schedule = TeamBonusSchedule(
            tiers=(BonusTier(threshold=Decimal("10"), reward=Decimal("1.5")),),
            window=timedelta(hours=1),
        )
        evaluator = TeamBonusEvaluator(mock_ledger, schedule)
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("10")

        result = await evaluator.evaluate(1, AS_OF)

        assert result == [
            QualifiedBonus(threshold=Decimal("10"), reward_amount=Decimal("1.50"))
        ]
        mock_ledger.sum_direct_team_deposits.assert_awaited_once_with(
            1, AS_OF - timedelta(hours=1)
        )

    @pytest.mark.asyncio
    async def test_team_volume(self, evaluator, mock_ledger):
        """Team volume reads the rolling window."""
        mock_ledger.sum_direct_team_deposits.return_value = Decimal("321.00")

        assert await evaluator.team_volume(3, AS_OF) == Decimal("321.00")
