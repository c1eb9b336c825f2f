"""Tests for the change feed endpoints."""

import asyncio
import json

from src.api.routes.ledger import stream_changes
from src.core.entities import ChangeKind
from src.core.services import LedgerChangeFeed, LedgerQueryService
from src.infrastructure.storage.memory import InMemoryLedgerStore

MANUFACTURER = "0x1234567890123456789012345678901234567890"


class TestChangeFeed:
    async def test_poll_changes(self, async_client, caller_headers):
        for name in ("Phone", "Watch"):
            await async_client.post(
                "/api/products",
                json={"product_name": name, "manufacturer_name": "TechCorp"},
                headers=caller_headers(MANUFACTURER, "manufacturer"),
            )

        body = (await async_client.get("/api/ledger/changes", params={"since": 1})).json()

        assert body["latest_sequence"] == 2
        assert [c["sequence"] for c in body["changes"]] == [2]
        assert body["changes"][0]["kind"] == "registered"

    async def test_negative_since_rejected(self, async_client):
        response = await async_client.get("/api/ledger/changes", params={"since": -1})
        assert response.status_code == 422


class TestChangeStream:
    async def test_stream_emits_server_sent_events(self):
        feed = LedgerChangeFeed()
        queries = LedgerQueryService(InMemoryLedgerStore(), change_feed=feed)

        response = await stream_changes(queries)
        stream = response.body_iterator
        pending = asyncio.ensure_future(stream.__anext__())
        while feed.subscriber_count == 0:
            await asyncio.sleep(0)

        feed.publish(ChangeKind.REPORTED, 7, "PRD-A-7")
        chunk = await asyncio.wait_for(pending, timeout=1)
        await stream.aclose()

        assert response.media_type == "text/event-stream"
        header, data = chunk.strip().split("\n")
        assert header == "id: 1"
        assert json.loads(data.removeprefix("data: "))["identifier"] == "PRD-A-7"
        assert feed.subscriber_count == 0
