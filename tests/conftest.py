"""Pytest configuration and fixtures."""

import os

# Must be set before src.api.main builds the app at import time
os.environ.setdefault("STORAGE_BACKEND", "memory")

from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities.identity import Caller, CallerRole
from src.core.entities.product import ProductRecord
from src.core.services import IdentifierGenerator, ProductLedger
from src.infrastructure.storage.memory import InMemoryLedgerStore

MANUFACTURER = "0x1234567890123456789012345678901234567890"
DISTRIBUTOR = "0x2345678901234567890123456789012345678901"
CONSUMER = "0x3456789012345678901234567890123456789012"
REGULATOR = "0x4567890123456789012345678901234567890123"


class SteppingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 5, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture(autouse=True)
def _reset_singletons() -> Iterator[None]:
    """Fresh settings and services for every test."""
    reset_settings()
    reset_services()
    yield
    reset_services()
    reset_settings()


@pytest.fixture
def memory_store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def ledger(memory_store: InMemoryLedgerStore, clock: SteppingClock) -> ProductLedger:
    return ProductLedger(store=memory_store, generator=IdentifierGenerator(), clock=clock)


@pytest.fixture
async def registered_product(ledger: ProductLedger) -> ProductRecord:
    """A product registered by MANUFACTURER under a generated identifier."""
    return await ledger.register_generated(
        manufacturer_identity=MANUFACTURER,
        product_name="Premium Smartphone",
        manufacturer_name="TechCorp",
        price=799.0,
        product_type="Electronics",
    )


@pytest.fixture
def manufacturer_caller() -> Caller:
    return Caller(caller_id=MANUFACTURER, role=CallerRole.MANUFACTURER)


@pytest.fixture
def distributor_caller() -> Caller:
    return Caller(caller_id=DISTRIBUTOR, role=CallerRole.DISTRIBUTOR)


@pytest.fixture
def consumer_caller() -> Caller:
    return Caller(caller_id=CONSUMER, role=CallerRole.CONSUMER)


@pytest.fixture
def regulator_caller() -> Caller:
    return Caller(caller_id=REGULATOR, role=CallerRole.REGULATOR)


@pytest.fixture
def caller_headers():
    """Build the headers the upstream auth proxy would set."""

    def _headers(caller_id: str, role: str) -> dict[str, str]:
        return {"X-Caller-Id": caller_id, "X-Caller-Role": role}

    return _headers


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Async client against the real app (memory backend)."""
    from src.api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
