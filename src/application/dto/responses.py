"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.core.entities import (
    CounterfeitReport,
    CustodianBinding,
    CustodyEvent,
    EnrichedReport,
    LedgerChange,
    ProductRecord,
)


class ProductResponse(BaseModel):
    """Product record response DTO."""

    product_id: int = Field(..., description="Ledger product ID")
    identifier: str = Field(..., description="External identifier (QR content)")
    product_name: str = Field(..., description="Product name")
    manufacturer_name: str = Field(..., description="Manufacturer display name")
    manufacturer_identity: str = Field(..., description="Registering custodian")
    current_owner: str = Field(..., description="Present custodian")
    is_authentic: bool = Field(..., description="False once reported counterfeit")
    status: str = Field(..., description="authentic or flagged")
    product_type: str | None = Field(default=None, description="Product category")
    description: str | None = Field(default=None, description="Description")
    price: float | None = Field(default=None, description="Unit price")
    registered_at: datetime = Field(..., description="Registration time (UTC)")

    @classmethod
    def from_entity(cls, product: ProductRecord) -> "ProductResponse":
        return cls(
            product_id=product.product_id,
            identifier=product.identifier,
            product_name=product.product_name,
            manufacturer_name=product.manufacturer_name,
            manufacturer_identity=product.manufacturer_identity,
            current_owner=product.current_owner,
            is_authentic=product.is_authentic,
            status=product.status.value,
            product_type=product.product_type,
            description=product.description,
            price=product.price,
            registered_at=product.registered_at,
        )


class ProductListResponse(BaseModel):
    """List of products."""

    products: list[ProductResponse] = Field(default_factory=list)
    total: int = Field(..., description="Number of products returned")


class CustodyEventResponse(BaseModel):
    """One custody event."""

    event_id: int | None = Field(default=None, description="Event ID")
    product_id: int = Field(..., description="Product ID")
    from_identity: str = Field(..., description="Previous custodian (null identity for manufacture)")
    to_identity: str = Field(..., description="New custodian")
    event_type: str = Field(..., description="MANUFACTURED, DISTRIBUTED, SOLD or TRANSFERRED")
    location: str = Field(..., description="Where the event happened")
    timestamp: datetime = Field(..., description="Event time (UTC)")

    @classmethod
    def from_entity(cls, event: CustodyEvent) -> "CustodyEventResponse":
        return cls(
            event_id=event.event_id,
            product_id=event.product_id,
            from_identity=event.from_identity,
            to_identity=event.to_identity,
            event_type=event.event_type.value,
            location=event.location,
            timestamp=event.timestamp,
        )


class HistoryResponse(BaseModel):
    """Custody history of a product."""

    product_id: int
    events: list[CustodyEventResponse] = Field(default_factory=list)
    total: int


class VerificationResponse(BaseModel):
    """Tri-state verification outcome."""

    identifier: str = Field(..., description="Normalized identifier presented")
    status: str = Field(..., description="authentic, flagged or unregistered")
    message: str = Field(..., description="Human-readable verdict")
    product: ProductResponse | None = Field(default=None, description="Record when registered")
    history: list[CustodyEventResponse] = Field(default_factory=list)


class TransferResponse(BaseModel):
    """Successful transfer."""

    product: ProductResponse
    event: CustodyEventResponse


class CounterfeitReportResponse(BaseModel):
    """Counterfeit report as logged."""

    report_id: int | None = Field(default=None, description="Report ID")
    product_id: int = Field(..., description="Reported product")
    identifier: str | None = Field(default=None, description="Identifier at report time")
    reason: str = Field(..., description="Report reason")
    reporter_identity: str = Field(..., description="Who reported")
    product_name: str = Field(..., description="Product name snapshot")
    manufacturer_name: str = Field(..., description="Manufacturer snapshot")
    timestamp: datetime = Field(..., description="Report time (UTC)")

    @classmethod
    def from_entity(cls, report: CounterfeitReport) -> "CounterfeitReportResponse":
        return cls(
            report_id=report.report_id,
            product_id=report.product_id,
            identifier=report.identifier,
            reason=report.reason,
            reporter_identity=report.reporter_identity,
            product_name=report.product_name,
            manufacturer_name=report.manufacturer_name,
            timestamp=report.timestamp,
        )


class ReportListResponse(BaseModel):
    """Filtered report log."""

    reports: list[CounterfeitReportResponse] = Field(default_factory=list)
    total: int


class EnrichedReportResponse(BaseModel):
    """Report joined with current product data."""

    report_id: int | None = None
    product_id: int
    identifier: str | None = None
    reason: str
    reporter_identity: str
    timestamp: datetime
    product_name: str
    manufacturer_name: str
    is_authentic: bool | None = None

    @classmethod
    def from_entity(cls, report: EnrichedReport) -> "EnrichedReportResponse":
        return cls(**report.model_dump(by_alias=False))


class EnrichedReportListResponse(BaseModel):
    """Enriched reports for dashboards."""

    reports: list[EnrichedReportResponse] = Field(default_factory=list)
    total: int


class AuthenticityStatsResponse(BaseModel):
    """Authenticity partition counts."""

    authentic: int
    flagged: int
    total: int


class LedgerChangeResponse(BaseModel):
    """Change feed entry."""

    sequence: int
    kind: str
    product_id: int
    identifier: str
    occurred_at: datetime

    @classmethod
    def from_entity(cls, change: LedgerChange) -> "LedgerChangeResponse":
        return cls(
            sequence=change.sequence,
            kind=change.kind.value,
            product_id=change.product_id,
            identifier=change.identifier,
            occurred_at=change.occurred_at,
        )


class ChangeFeedResponse(BaseModel):
    """Page of the change feed."""

    changes: list[LedgerChangeResponse] = Field(default_factory=list)
    latest_sequence: int = Field(..., description="Highest sequence published so far")


class BindingResponse(BaseModel):
    """Caller to custodian binding."""

    binding_id: int | None = None
    caller_id: str
    role: str
    custodian: str
    bound_at: datetime

    @classmethod
    def from_entity(cls, binding: CustodianBinding) -> "BindingResponse":
        return cls(
            binding_id=binding.binding_id,
            caller_id=binding.caller_id,
            role=binding.role.value,
            custodian=binding.custodian,
            bound_at=binding.bound_at,
        )


class BindingHistoryResponse(BaseModel):
    """All bindings of a caller, oldest first."""

    caller_id: str
    current_custodian: str
    bindings: list[BindingResponse] = Field(default_factory=list)


class GeneratedIdentifierResponse(BaseModel):
    """Freshly generated identifier."""

    identifier: str
    qr_payload: str


class ProviderHealthResponse(BaseModel):
    """Health of a backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy or degraded")
    version: str = Field(..., description="Application version")
    uptime_seconds: float = Field(..., description="Seconds since startup")
    storage: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    hint: str = Field(default="", description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional detail")
    details: dict[str, Any] | None = Field(default=None, description="Structured context")
    path: str | None = Field(default=None, description="Request path")
