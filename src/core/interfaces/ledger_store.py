"""
Abstract interface for ledger storage.

The store offers get/put/scan capability only. Atomicity of the
check-and-mutate sequences lives in the ProductLedger, not here; a store
only guarantees that each write method is applied as one unit and that
returned entities are copies callers may not use to mutate stored state.
"""

from abc import ABC, abstractmethod

from src.core.entities.identity import CustodianBinding
from src.core.entities.product import CounterfeitReport, CustodyEvent, ProductRecord


class ILedgerStore(ABC):
    """Interface for product, custody, report and binding persistence."""

    # Product operations
    @abstractmethod
    async def get_product(self, product_id: int) -> ProductRecord | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def get_product_by_identifier(self, identifier: str) -> ProductRecord | None:
        """Get product by its external identifier."""
        pass

    @abstractmethod
    async def scan_products(self) -> list[ProductRecord]:
        """All products in registration order."""
        pass

    @abstractmethod
    async def next_product_id(self) -> int:
        """Next unused product ID (monotonic)."""
        pass

    @abstractmethod
    async def insert_product(
        self, product: ProductRecord, event: CustodyEvent
    ) -> ProductRecord:
        """
        Insert a new product together with its MANUFACTURED event.

        Raises DuplicateIdentifierError if the identifier is taken.
        """
        pass

    @abstractmethod
    async def record_transfer(
        self, product: ProductRecord, event: CustodyEvent
    ) -> CustodyEvent:
        """Persist the new current owner and append the custody event."""
        pass

    @abstractmethod
    async def record_report(
        self, product: ProductRecord, report: CounterfeitReport
    ) -> CounterfeitReport:
        """Persist the authenticity flag and append the report."""
        pass

    # Custody history
    @abstractmethod
    async def get_history(self, product_id: int) -> list[CustodyEvent]:
        """Custody events for a product, oldest first."""
        pass

    # Report log
    @abstractmethod
    async def append_report(self, report: CounterfeitReport) -> CounterfeitReport:
        """Append a report without touching the product."""
        pass

    @abstractmethod
    async def scan_reports(self) -> list[CounterfeitReport]:
        """All reports in insertion order."""
        pass

    @abstractmethod
    async def count_reports(self) -> int:
        """Number of reports."""
        pass

    # Identity bindings
    @abstractmethod
    async def put_binding(self, binding: CustodianBinding) -> CustodianBinding:
        """Append a caller -> custodian binding."""
        pass

    @abstractmethod
    async def get_bindings(self, caller_id: str) -> list[CustodianBinding]:
        """Bindings for a caller, oldest first."""
        pass
