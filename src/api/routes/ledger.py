"""
Ledger change feed endpoints.

Polling via /changes, push via the /changes/stream server-sent events.
"""

import json

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from src.api.dependencies import get_queries
from src.application.dto.responses import ChangeFeedResponse, LedgerChangeResponse
from src.config import get_logger
from src.core.services import LedgerQueryService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/ledger", tags=["ledger"])


@router.get("/changes", response_model=ChangeFeedResponse)
async def list_changes(
    since: int = Query(default=0, ge=0, description="Return changes after this sequence"),
    limit: int = Query(default=100, ge=1, le=1000),
    queries: LedgerQueryService = Depends(get_queries),
) -> ChangeFeedResponse:
    """Changes published after `since`, oldest first."""
    changes = queries.changes_since(since, limit)
    return ChangeFeedResponse(
        changes=[LedgerChangeResponse.from_entity(c) for c in changes],
        latest_sequence=queries.latest_sequence,
    )


@router.get("/changes/stream")
async def stream_changes(
    queries: LedgerQueryService = Depends(get_queries),
) -> StreamingResponse:
    """Server-sent events for every ledger change from now on."""

    async def generate():
        async with queries.subscribe() as queue:
            logger.info("change_stream_opened")
            try:
                while True:
                    change = await queue.get()
                    body = LedgerChangeResponse.from_entity(change).model_dump(mode="json")
                    yield f"id: {change.sequence}\ndata: {json.dumps(body)}\n\n"
            finally:
                logger.info("change_stream_closed")

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
