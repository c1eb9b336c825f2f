"""Core domain entities."""

from src.core.entities.identity import Caller, CallerRole, CustodianBinding
from src.core.entities.ledger import (
    UNKNOWN_MANUFACTURER,
    UNKNOWN_PRODUCT,
    AuthenticityCounts,
    ChangeKind,
    ComplianceSnapshot,
    EnrichedReport,
    LedgerChange,
    ReportFilter,
)
from src.core.entities.product import (
    MANUFACTURING_LOCATION,
    NULL_IDENTITY,
    TRANSFER_EVENT_TYPES,
    AuthenticityStatus,
    CounterfeitReport,
    CustodyEvent,
    CustodyEventType,
    ProductRecord,
    TransferResult,
    VerificationResult,
    VerificationStatus,
)

__all__ = [
    # Product
    "NULL_IDENTITY",
    "MANUFACTURING_LOCATION",
    "TRANSFER_EVENT_TYPES",
    "AuthenticityStatus",
    "CounterfeitReport",
    "CustodyEvent",
    "CustodyEventType",
    "ProductRecord",
    "TransferResult",
    "VerificationResult",
    "VerificationStatus",
    # Ledger read side
    "UNKNOWN_PRODUCT",
    "UNKNOWN_MANUFACTURER",
    "AuthenticityCounts",
    "ChangeKind",
    "ComplianceSnapshot",
    "EnrichedReport",
    "LedgerChange",
    "ReportFilter",
    # Identity
    "Caller",
    "CallerRole",
    "CustodianBinding",
]
