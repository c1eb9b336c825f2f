"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    BindIdentityRequest,
    RegisterProductRequest,
    ReportCounterfeitRequest,
    ScanVerifyRequest,
    TransferOwnershipRequest,
)
from src.application.dto.responses import (
    AuthenticityStatsResponse,
    BindingHistoryResponse,
    BindingResponse,
    ChangeFeedResponse,
    CounterfeitReportResponse,
    CustodyEventResponse,
    EnrichedReportListResponse,
    EnrichedReportResponse,
    ErrorResponse,
    GeneratedIdentifierResponse,
    HealthResponse,
    HistoryResponse,
    LedgerChangeResponse,
    ProductListResponse,
    ProductResponse,
    ProviderHealthResponse,
    ReportListResponse,
    TransferResponse,
    VerificationResponse,
)

__all__ = [
    # Requests
    "RegisterProductRequest",
    "TransferOwnershipRequest",
    "ReportCounterfeitRequest",
    "ScanVerifyRequest",
    "BindIdentityRequest",
    # Responses
    "ProductResponse",
    "ProductListResponse",
    "CustodyEventResponse",
    "HistoryResponse",
    "VerificationResponse",
    "TransferResponse",
    "CounterfeitReportResponse",
    "ReportListResponse",
    "EnrichedReportResponse",
    "EnrichedReportListResponse",
    "AuthenticityStatsResponse",
    "LedgerChangeResponse",
    "ChangeFeedResponse",
    "BindingResponse",
    "BindingHistoryResponse",
    "GeneratedIdentifierResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
