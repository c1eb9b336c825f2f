"""Read-side ledger entities: change feed, aggregates and the compliance export."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN_MANUFACTURER = "Unknown Manufacturer"


class ChangeKind(str, Enum):
    """Mutation that produced a change-feed entry."""

    REGISTERED = "registered"
    TRANSFERRED = "transferred"
    REPORTED = "reported"


class LedgerChange(BaseModel):
    """Entry on the ledger change feed, ordered by sequence."""

    sequence: int
    kind: ChangeKind
    product_id: int
    identifier: str
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ReportFilter(BaseModel):
    """Case-insensitive substring filter over counterfeit reports."""

    product_id: str | None = None
    manufacturer: str | None = None
    reason: str | None = None
    search: str | None = None  # product name OR manufacturer OR reason

    @property
    def is_empty(self) -> bool:
        return not any((self.product_id, self.manufacturer, self.reason, self.search))


class AuthenticityCounts(BaseModel):
    """Partition of registered products by authenticity."""

    authentic: int = 0
    flagged: int = 0

    @property
    def total(self) -> int:
        return self.authentic + self.flagged


class EnrichedReport(BaseModel):
    """Counterfeit report with product fields resolved at query time."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    report_id: int | None = None
    product_id: int
    identifier: str | None = None
    reason: str
    reporter_identity: str
    timestamp: datetime
    product_name: str = UNKNOWN_PRODUCT
    manufacturer_name: str = UNKNOWN_MANUFACTURER
    is_authentic: bool | None = None  # None when product could not be resolved


class ComplianceSnapshot(BaseModel):
    """Regulator-facing aggregate document for offline review."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    total_products: int
    authentic_count: int
    flagged_count: int
    report_count: int
    reports: list[EnrichedReport] = Field(default_factory=list)

    def to_document(self) -> dict:
        """JSON-compatible dict using the camelCase export keys."""
        return self.model_dump(mode="json", by_alias=True)
