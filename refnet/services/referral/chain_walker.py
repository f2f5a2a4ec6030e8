"""
Referral chain walking.

Yields the ancestors of a user one level at a time, reading the store on
every call.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass

from loguru import logger

from refnet.services.referral.config import REFERRAL_DEPTH
from refnet.services.ledger import LedgerStore


@dataclass(frozen=True, slots=True)
class ChainLink:
    """An ancestor and its distance from the starting user."""

    ancestor_id: int
    level: int


class ReferralChainWalker:
    """Walks the referrer chain upwards from a user."""

    def __init__(self, ledger: LedgerStore, depth: int = REFERRAL_DEPTH) -> None:
        """
        Initialize chain walker.

        Args:
            ledger: Ledger store to read users from
            depth: Maximum number of ancestors to yield
        """
        self.ledger = ledger
        self.depth = depth

    async def walk_ancestors(self, user_id: int) -> AsyncIterator[ChainLink]:
        """
        Yield ancestors of a user, direct referrer first.

        Stops at the first missing referrer or after `depth` levels. A
        referrer id that does not resolve to a user truncates the chain.

        Args:
            user_id: Starting user ID (not yielded)

        Yields:
            ChainLink for each ancestor, level starting at 1
        """
        user = await self.ledger.get_user(user_id)
        if user is None:
            return

        visited = {user_id}
        next_id = user.referrer_id
        level = 1

        while next_id is not None and level <= self.depth:
            if next_id in visited:
                logger.warning(
                    "Referral loop detected, chain truncated",
                    extra={"user_id": user_id, "ancestor_id": next_id},
                )
                return

            ancestor = await self.ledger.get_user(next_id)
            if ancestor is None:
                logger.debug(
                    "Unknown referrer, chain truncated",
                    extra={
                        "user_id": user_id,
                        "ancestor_id": next_id,
                        "level": level,
                    },
                )
                return

            visited.add(ancestor.id)
            yield ChainLink(ancestor_id=ancestor.id, level=level)

            next_id = ancestor.referrer_id
            level += 1

    async def get_chain(self, user_id: int) -> list[ChainLink]:
        """Collect the whole chain into a list."""
        return [link async for link in self.walk_ancestors(user_id)]
