"""
Unit tests for referral chain walking.

Tests cover:
- Chain order and levels
- Depth limit
- Truncation on missing referrers and loops
- Laziness and restartability
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from refnet.services.referral.chain_walker import ChainLink, ReferralChainWalker


def make_user(user_id, referrer_id=None):
    """Create mock user object."""
    user = MagicMock()
    user.id = user_id
    user.referrer_id = referrer_id
    return user


def ledger_with(users):
    """Mock ledger serving users from a dict."""
    by_id = {u.id: u for u in users}
    ledger = AsyncMock()
    ledger.get_user = AsyncMock(side_effect=lambda user_id: by_id.get(user_id))
    return ledger


@pytest.fixture
def deep_ledger():
    """Linear chain 1 <- 2 <- 3 <- 4 <- 5 <- 6."""
    users = [make_user(1)] + [make_user(i, i - 1) for i in range(2, 7)]
    return ledger_with(users)


class TestWalkAncestors:
    """Test ancestor chain traversal."""

    @pytest.mark.asyncio
    async def test_no_referrer_yields_nothing(self):
        """User without referrer has an empty chain."""
        walker = ReferralChainWalker(ledger_with([make_user(1)]))
        assert await walker.get_chain(1) == []

    @pytest.mark.asyncio
    async def test_unknown_user_yields_nothing(self):
        """Unknown starting user has an empty chain."""
        walker = ReferralChainWalker(ledger_with([]))
        assert await walker.get_chain(42) == []

    @pytest.mark.asyncio
    async def test_levels_in_order(self):
        """Direct referrer is level 1."""
        ledger = ledger_with([make_user(1), make_user(2, 1), make_user(3, 2)])
        walker = ReferralChainWalker(ledger)

        chain = await walker.get_chain(3)

        assert chain == [
            ChainLink(ancestor_id=2, level=1),
            ChainLink(ancestor_id=1, level=2),
        ]

    @pytest.mark.asyncio
    async def test_depth_limited_to_three(self, deep_ledger):
        """Deeper graphs still yield at most three ancestors."""
        walker = ReferralChainWalker(deep_ledger)

        chain = await walker.get_chain(6)

        assert chain == [
            ChainLink(ancestor_id=5, level=1),
            ChainLink(ancestor_id=4, level=2),
            ChainLink(ancestor_id=3, level=3),
        ]
        # Starting user plus three ancestors, nothing beyond
        assert deep_ledger.get_user.await_count == 4

    @pytest.mark.asyncio
    async def test_custom_depth(self, deep_ledger):
        """Depth is configurable."""
        walker = ReferralChainWalker(deep_ledger, depth=1)
        assert await walker.get_chain(6) == [ChainLink(ancestor_id=5, level=1)]

    @pytest.mark.asyncio
    async def test_missing_ancestor_truncates(self):
        """Dangling referrer id ends the chain silently."""
        ledger = ledger_with([make_user(2, 99), make_user(3, 2)])
        walker = ReferralChainWalker(ledger)

        chain = await walker.get_chain(3)

        assert chain == [ChainLink(ancestor_id=2, level=1)]

    @pytest.mark.asyncio
    async def test_loop_truncates(self):
        """A revisited user stops the walk."""
        ledger = ledger_with([make_user(1, 2), make_user(2, 1)])
        walker = ReferralChainWalker(ledger)

        chain = await walker.get_chain(1)

        assert chain == [ChainLink(ancestor_id=2, level=1)]

    @pytest.mark.asyncio
    async def test_walk_is_lazy(self, deep_ledger):
        """Stopping after the first link reads no further ancestors."""
        walker = ReferralChainWalker(deep_ledger)

        async for link in walker.walk_ancestors(6):
            assert link == ChainLink(ancestor_id=5, level=1)
            break

        assert deep_ledger.get_user.await_count == 2

    @pytest.mark.asyncio
    async def test_walk_is_restartable(self, deep_ledger):
        """Every call re-reads the store."""
        walker = ReferralChainWalker(deep_ledger)

        first = await walker.get_chain(6)
        second = await walker.get_chain(6)

        assert first == second
        assert deep_ledger.get_user.await_count == 8
