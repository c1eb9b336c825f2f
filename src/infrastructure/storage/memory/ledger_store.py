"""
In-memory implementation of ledger storage.

Used for tests and throwaway demos. No method awaits partway through a
write, so each write is applied atomically with respect to the event
loop. Everything handed in or out is deep-copied.
"""

from collections import defaultdict

from src.config import get_logger
from src.core.entities.identity import CustodianBinding
from src.core.entities.product import CounterfeitReport, CustodyEvent, ProductRecord
from src.core.exceptions import DuplicateIdentifierError
from src.core.interfaces.ledger_store import ILedgerStore

logger = get_logger(__name__)


class InMemoryLedgerStore(ILedgerStore):
    """Dict and list backed ledger store."""

    def __init__(self) -> None:
        self._products: dict[int, ProductRecord] = {}
        self._by_identifier: dict[str, int] = {}
        self._events: dict[int, list[CustodyEvent]] = defaultdict(list)
        self._reports: list[CounterfeitReport] = []
        self._bindings: dict[str, list[CustodianBinding]] = defaultdict(list)

        self._event_seq = 0
        self._report_seq = 0
        self._binding_seq = 0

    # Product operations

    async def get_product(self, product_id: int) -> ProductRecord | None:
        product = self._products.get(product_id)
        return product.model_copy(deep=True) if product else None

    async def get_product_by_identifier(self, identifier: str) -> ProductRecord | None:
        product_id = self._by_identifier.get(identifier)
        if product_id is None:
            return None
        return await self.get_product(product_id)

    async def scan_products(self) -> list[ProductRecord]:
        return [self._products[pid].model_copy(deep=True) for pid in sorted(self._products)]

    async def next_product_id(self) -> int:
        return max(self._products, default=0) + 1

    async def insert_product(
        self, product: ProductRecord, event: CustodyEvent
    ) -> ProductRecord:
        existing = self._by_identifier.get(product.identifier)
        if existing is not None:
            raise DuplicateIdentifierError(product.identifier, existing)

        self._products[product.product_id] = product.model_copy(deep=True)
        self._by_identifier[product.identifier] = product.product_id
        self._append_event(event)
        return product.model_copy(deep=True)

    async def record_transfer(
        self, product: ProductRecord, event: CustodyEvent
    ) -> CustodyEvent:
        stored = self._products[product.product_id]
        self._products[product.product_id] = stored.model_copy(
            update={"current_owner": product.current_owner}
        )
        return self._append_event(event)

    async def record_report(
        self, product: ProductRecord, report: CounterfeitReport
    ) -> CounterfeitReport:
        stored = self._products[product.product_id]
        # Never resurrect a flagged product, whatever the caller passes
        is_authentic = stored.is_authentic and product.is_authentic
        self._products[product.product_id] = stored.model_copy(
            update={"is_authentic": is_authentic}
        )
        return self._append_report(report)

    # Custody history

    async def get_history(self, product_id: int) -> list[CustodyEvent]:
        return [e.model_copy(deep=True) for e in self._events.get(product_id, [])]

    # Report log

    async def append_report(self, report: CounterfeitReport) -> CounterfeitReport:
        return self._append_report(report)

    async def scan_reports(self) -> list[CounterfeitReport]:
        return [r.model_copy(deep=True) for r in self._reports]

    async def count_reports(self) -> int:
        return len(self._reports)

    # Identity bindings

    async def put_binding(self, binding: CustodianBinding) -> CustodianBinding:
        self._binding_seq += 1
        stored = binding.model_copy(update={"binding_id": self._binding_seq})
        self._bindings[binding.caller_id].append(stored)
        return stored.model_copy(deep=True)

    async def get_bindings(self, caller_id: str) -> list[CustodianBinding]:
        return [b.model_copy(deep=True) for b in self._bindings.get(caller_id, [])]

    # Helpers

    def _append_event(self, event: CustodyEvent) -> CustodyEvent:
        self._event_seq += 1
        stored = event.model_copy(update={"event_id": self._event_seq})
        self._events[event.product_id].append(stored)
        return stored.model_copy(deep=True)

    def _append_report(self, report: CounterfeitReport) -> CounterfeitReport:
        self._report_seq += 1
        stored = report.model_copy(update={"report_id": self._report_seq})
        self._reports.append(stored)
        return stored.model_copy(deep=True)
