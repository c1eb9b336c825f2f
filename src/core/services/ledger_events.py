"""
Ledger change feed.

Every successful mutation is published here with a monotonically
increasing sequence number. Consumers either poll with changes_since()
or hold a subscription queue.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.config import get_logger
from src.core.entities.ledger import ChangeKind, LedgerChange

logger = get_logger(__name__)


class LedgerChangeFeed:
    """Bounded in-process change history with push subscriptions."""

    def __init__(self, max_size: int = 1000) -> None:
        self._history: deque[LedgerChange] = deque(maxlen=max_size)
        self._sequence = 0
        self._subscribers: set[asyncio.Queue[LedgerChange]] = set()

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, kind: ChangeKind, product_id: int, identifier: str) -> LedgerChange:
        """Record a change and fan it out to subscribers."""
        self._sequence += 1
        change = LedgerChange(
            sequence=self._sequence,
            kind=kind,
            product_id=product_id,
            identifier=identifier,
        )
        self._history.append(change)

        for queue in self._subscribers:
            try:
                queue.put_nowait(change)
            except asyncio.QueueFull:
                # Slow subscriber; it can catch up via changes_since()
                logger.warning(
                    "change_feed_subscriber_lagging",
                    sequence=change.sequence,
                )
        return change

    def changes_since(self, sequence: int = 0, limit: int = 100) -> list[LedgerChange]:
        """Changes with a sequence strictly greater than `sequence`, oldest first."""
        result = [c for c in self._history if c.sequence > sequence]
        return result[:limit]

    @asynccontextmanager
    async def subscribe(self, max_queue: int = 100) -> AsyncIterator[asyncio.Queue[LedgerChange]]:
        """
        Subscribe to changes published after entry.

        Usage:
            async with feed.subscribe() as queue:
                change = await queue.get()
        """
        queue: asyncio.Queue[LedgerChange] = asyncio.Queue(maxsize=max_queue)
        self._subscribers.add(queue)
        logger.debug("change_feed_subscribed", subscribers=len(self._subscribers))
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)
            logger.debug("change_feed_unsubscribed", subscribers=len(self._subscribers))
