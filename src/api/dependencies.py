"""
Dependency injection container for FastAPI.

Provides service instances and the authenticated caller to route handlers.
"""

from functools import lru_cache

from fastapi import Header

from src.application.services import (
    get_identifier_generator,
    get_product_ledger,
    get_query_service,
    get_report_log,
)
from src.application.use_cases import (
    BindIdentityUseCase,
    ExportComplianceUseCase,
    RegisterProductUseCase,
    ReportCounterfeitUseCase,
    TransferOwnershipUseCase,
    VerifyProductUseCase,
)
from src.config import Settings, get_settings
from src.core.entities.identity import Caller, CallerRole
from src.core.entities.ledger import ReportFilter
from src.core.exceptions import InvalidInputError
from src.core.services import (
    IdentifierGenerator,
    LedgerQueryService,
    ProductLedger,
    ReportLog,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Caller identity (set by the upstream auth proxy)
def get_caller(
    x_caller_id: str = Header(..., description="Authenticated caller identity"),
    x_caller_role: str = Header(..., description="manufacturer, distributor, consumer or regulator"),
) -> Caller:
    """Build the authenticated caller from proxy headers."""
    caller_id = x_caller_id.strip()
    if not caller_id:
        raise InvalidInputError("X-Caller-Id", "is required")
    try:
        role = CallerRole(x_caller_role.strip().lower())
    except ValueError:
        raise InvalidInputError("X-Caller-Role", f"unknown role '{x_caller_role}'") from None
    return Caller(caller_id=caller_id, role=role)


# Report filter shared by the report listings and the compliance export
def get_report_filter(
    product_id: str | None = None,
    manufacturer: str | None = None,
    reason: str | None = None,
    search: str | None = None,
) -> ReportFilter:
    """Case-insensitive substring filters, blanks ignored."""
    return ReportFilter(
        product_id=product_id or None,
        manufacturer=manufacturer or None,
        reason=reason or None,
        search=search or None,
    )


# Service dependencies
def get_ledger() -> ProductLedger:
    """Get product ledger."""
    return get_product_ledger()


def get_queries() -> LedgerQueryService:
    """Get ledger query service."""
    return get_query_service()


def get_reports() -> ReportLog:
    """Get counterfeit report log."""
    return get_report_log()


def get_generator() -> IdentifierGenerator:
    """Get identifier generator."""
    return get_identifier_generator()


# Use case dependencies
def get_register_product_use_case() -> RegisterProductUseCase:
    """Get register product use case."""
    return RegisterProductUseCase()


def get_verify_product_use_case() -> VerifyProductUseCase:
    """Get verify product use case."""
    return VerifyProductUseCase()


def get_transfer_ownership_use_case() -> TransferOwnershipUseCase:
    """Get transfer ownership use case."""
    return TransferOwnershipUseCase()


def get_report_counterfeit_use_case() -> ReportCounterfeitUseCase:
    """Get report counterfeit use case."""
    return ReportCounterfeitUseCase()


def get_export_compliance_use_case() -> ExportComplianceUseCase:
    """Get export compliance use case."""
    return ExportComplianceUseCase()


def get_bind_identity_use_case() -> BindIdentityUseCase:
    """Get bind identity use case."""
    return BindIdentityUseCase()
