"""Tests for LedgerChangeFeed."""

import asyncio

from src.core.entities import ChangeKind
from src.core.services import LedgerChangeFeed


class TestPublish:
    def test_sequences_increase(self):
        feed = LedgerChangeFeed()
        first = feed.publish(ChangeKind.REGISTERED, 1, "PRD-A-1")
        second = feed.publish(ChangeKind.TRANSFERRED, 1, "PRD-A-1")

        assert (first.sequence, second.sequence) == (1, 2)
        assert feed.latest_sequence == 2

    def test_changes_since_is_exclusive(self):
        feed = LedgerChangeFeed()
        for product_id in range(1, 6):
            feed.publish(ChangeKind.REGISTERED, product_id, f"PRD-A-{product_id}")

        assert [c.sequence for c in feed.changes_since(2)] == [3, 4, 5]
        assert [c.sequence for c in feed.changes_since(0, limit=2)] == [1, 2]
        assert feed.changes_since(5) == []

    def test_history_is_bounded(self):
        feed = LedgerChangeFeed(max_size=3)
        for product_id in range(1, 6):
            feed.publish(ChangeKind.REGISTERED, product_id, f"PRD-A-{product_id}")

        assert [c.sequence for c in feed.changes_since(0)] == [3, 4, 5]
        assert feed.latest_sequence == 5


class TestSubscribe:
    async def test_receives_changes_after_entry(self):
        feed = LedgerChangeFeed()
        feed.publish(ChangeKind.REGISTERED, 1, "PRD-A-1")

        async with feed.subscribe() as queue:
            assert feed.subscriber_count == 1
            feed.publish(ChangeKind.REPORTED, 1, "PRD-A-1")
            change = await asyncio.wait_for(queue.get(), timeout=1)

        assert change.kind == ChangeKind.REPORTED
        assert change.sequence == 2
        assert queue.empty()

    async def test_unsubscribed_on_exit(self):
        feed = LedgerChangeFeed()
        async with feed.subscribe():
            pass
        assert feed.subscriber_count == 0

    async def test_full_queue_does_not_block_publisher(self):
        feed = LedgerChangeFeed()

        async with feed.subscribe(max_queue=1) as queue:
            feed.publish(ChangeKind.REGISTERED, 1, "PRD-A-1")
            feed.publish(ChangeKind.REGISTERED, 2, "PRD-A-2")

            assert queue.qsize() == 1
            assert feed.latest_sequence == 2
            assert [c.sequence for c in feed.changes_since(1)] == [2]
