"""Tests for InMemoryLedgerStore."""

import pytest

from src.core.entities import CounterfeitReport, CustodyEvent, CustodyEventType, ProductRecord
from src.core.exceptions import ConfigurationError, DuplicateIdentifierError
from src.infrastructure.storage import create_ledger_store
from src.infrastructure.storage.memory import InMemoryLedgerStore


def _product(product_id: int = 1, identifier: str = "PRD-A-1") -> ProductRecord:
    return ProductRecord(
        product_id=product_id,
        identifier=identifier,
        product_name="Phone",
        manufacturer_name="TechCorp",
        manufacturer_identity="0xm",
        current_owner="0xm",
    )


def _event(product_id: int = 1) -> CustodyEvent:
    return CustodyEvent(
        product_id=product_id,
        from_identity="0x0",
        to_identity="0xm",
        event_type=CustodyEventType.MANUFACTURED,
        location="Manufacturing Facility",
    )


class TestInMemoryLedgerStore:
    async def test_insert_assigns_event_id(self, memory_store):
        await memory_store.insert_product(_product(), _event())

        history = await memory_store.get_history(1)
        assert history[0].event_id == 1
        assert await memory_store.next_product_id() == 2

    async def test_duplicate_identifier(self, memory_store):
        await memory_store.insert_product(_product(), _event())

        with pytest.raises(DuplicateIdentifierError):
            await memory_store.insert_product(_product(2), _event(2))

    async def test_returns_copies(self, memory_store):
        await memory_store.insert_product(_product(), _event())

        copy = await memory_store.get_product(1)
        copy.current_owner = "0xthief"

        assert (await memory_store.get_product(1)).current_owner == "0xm"

    async def test_report_never_restores_authenticity(self, memory_store):
        await memory_store.insert_product(_product(), _event())
        report = CounterfeitReport(
            product_id=1,
            reason="r",
            reporter_identity="0xc",
            product_name="Phone",
            manufacturer_name="TechCorp",
        )
        flagged = _product().model_copy(update={"is_authentic": False})
        await memory_store.record_report(flagged, report)

        await memory_store.record_report(_product(), report)

        assert (await memory_store.get_product(1)).is_authentic is False
        assert await memory_store.count_reports() == 2

    async def test_unknown_history_is_empty(self, memory_store):
        assert await memory_store.get_history(42) == []


class TestCreateLedgerStore:
    def test_memory_backend(self):
        assert isinstance(create_ledger_store("memory"), InMemoryLedgerStore)

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            create_ledger_store("postgres")
