"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.authorization import require_role
from src.application.dto.requests import (
    BindIdentityRequest,
    RegisterProductRequest,
    ReportCounterfeitRequest,
    ScanVerifyRequest,
    TransferOwnershipRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    ProductResponse,
    TransferResponse,
    VerificationResponse,
)
from src.application.services import (
    get_identity_binding_service,
    get_ledger_store,
    get_product_ledger,
    get_query_service,
    reset_services,
)
from src.application.use_cases import (
    BindIdentityUseCase,
    ExportComplianceUseCase,
    RegisterProductUseCase,
    ReportCounterfeitUseCase,
    TransferOwnershipUseCase,
    VerifyProductUseCase,
)

__all__ = [
    # Request DTOs
    "RegisterProductRequest",
    "TransferOwnershipRequest",
    "ReportCounterfeitRequest",
    "ScanVerifyRequest",
    "BindIdentityRequest",
    # Response DTOs
    "ProductResponse",
    "VerificationResponse",
    "TransferResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "RegisterProductUseCase",
    "VerifyProductUseCase",
    "TransferOwnershipUseCase",
    "ReportCounterfeitUseCase",
    "ExportComplianceUseCase",
    "BindIdentityUseCase",
    # Authorization
    "require_role",
    # Service factories
    "get_ledger_store",
    "get_product_ledger",
    "get_query_service",
    "get_identity_binding_service",
    "reset_services",
]
