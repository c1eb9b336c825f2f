"""Tests for the error envelope and status mapping."""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest

from src.api.dependencies import get_queries
from src.api.middleware.error_handler import _status_for
from src.core.exceptions import (
    DatabaseError,
    DuplicateIdentifierError,
    InvalidInputError,
    NotOwnerError,
    PermissionDeniedError,
    ProductFlaggedError,
    ProductNotFoundError,
)
from src.core.services import LedgerQueryService


class TestStatusFor:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (InvalidInputError("location", "is required"), 400),
            (PermissionDeniedError("register products", "consumer", "manufacturer"), 403),
            (NotOwnerError(1, "0xabc"), 403),
            (ProductNotFoundError(7), 404),
            (DuplicateIdentifierError("PRD-AAA-11111"), 409),
            (ProductFlaggedError(1), 409),
            (DatabaseError("scan_products", "disk I/O error"), 500),
        ],
    )
    def test_domain_errors(self, exc, expected):
        assert _status_for(exc) == expected

    @pytest.mark.parametrize("exc", [KeyError("product_id"), ValueError("bad"), RuntimeError()])
    def test_builtin_errors_are_server_errors(self, exc):
        assert _status_for(exc) == 500


class TestUnhandledErrors:
    @pytest.fixture
    def failing_queries(self) -> Iterator[AsyncMock]:
        from src.api.main import app

        queries = AsyncMock(spec=LedgerQueryService)
        app.dependency_overrides[get_queries] = lambda: queries
        yield queries
        app.dependency_overrides.pop(get_queries, None)

    async def test_stray_key_error_is_500(self, async_client, failing_queries):
        failing_queries.counts_by_authenticity.side_effect = KeyError("authentic")

        response = await async_client.get("/api/stats/authenticity")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "KeyError"
        assert body["path"] == "/api/stats/authenticity"

    async def test_database_error_envelope(self, async_client, failing_queries):
        failing_queries.counts_by_authenticity.side_effect = DatabaseError(
            "scan_products", "no such table: products"
        )

        response = await async_client.get("/api/stats/authenticity")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "DATABASE_ERROR"
        assert body["details"]["operation"] == "scan_products"
