"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

All ledger-facing services share one store, one change feed and one
report log, so a mutation made through the ledger is immediately visible
to queries and change-feed consumers.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.config import get_logger, get_settings
from src.core.services import (
    IdentifierGenerator,
    IdentityBindingService,
    LedgerChangeFeed,
    LedgerQueryService,
    ProductLedger,
    ReportLog,
)

if TYPE_CHECKING:
    from src.core.interfaces import ILedgerStore

logger = get_logger(__name__)


# Singleton service instances
_ledger_store: "ILedgerStore | None" = None
_identifier_generator: IdentifierGenerator | None = None
_change_feed: LedgerChangeFeed | None = None
_report_log: ReportLog | None = None
_product_ledger: ProductLedger | None = None
_query_service: LedgerQueryService | None = None
_binding_service: IdentityBindingService | None = None


def get_ledger_store() -> "ILedgerStore":
    """
    Get or create the configured ledger store.

    The backend comes from STORAGE_BACKEND (sqlite or memory).
    """
    global _ledger_store

    if _ledger_store is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.storage import create_ledger_store

        backend = get_settings().storage.backend
        _ledger_store = create_ledger_store(backend)
        logger.info("ledger_store_created", backend=backend)

    return _ledger_store


def get_identifier_generator() -> IdentifierGenerator:
    global _identifier_generator

    if _identifier_generator is None:
        settings = get_settings()
        _identifier_generator = IdentifierGenerator(
            suffix_length=settings.ledger.identifier_suffix_length
        )
    return _identifier_generator


def get_change_feed() -> LedgerChangeFeed:
    global _change_feed

    if _change_feed is None:
        _change_feed = LedgerChangeFeed(max_size=get_settings().ledger.change_feed_size)
    return _change_feed


def get_report_log() -> ReportLog:
    global _report_log

    if _report_log is None:
        _report_log = ReportLog(get_ledger_store())
    return _report_log


def get_product_ledger(store: "ILedgerStore | None" = None) -> ProductLedger:
    """
    Get or create the ProductLedger.

    Passing a store builds a fresh, unshared ledger around it (tests and
    the CLI); the singleton is only cached for the configured store.

    Args:
        store: Optional ledger store override

    Returns:
        Configured ProductLedger
    """
    global _product_ledger

    if _product_ledger is not None and store is None:
        return _product_ledger

    settings = get_settings()
    if store is None:
        ledger = ProductLedger(
            store=get_ledger_store(),
            generator=get_identifier_generator(),
            change_feed=get_change_feed(),
            report_log=get_report_log(),
            max_register_retries=settings.ledger.max_register_retries,
        )
        _product_ledger = ledger
        return ledger

    return ProductLedger(
        store=store,
        generator=get_identifier_generator(),
        max_register_retries=settings.ledger.max_register_retries,
    )


def get_query_service() -> LedgerQueryService:
    """Get or create the read-only query service."""
    global _query_service

    if _query_service is None:
        _query_service = LedgerQueryService(
            store=get_ledger_store(),
            report_log=get_report_log(),
            change_feed=get_change_feed(),
        )
    return _query_service


def get_identity_binding_service() -> IdentityBindingService:
    global _binding_service

    if _binding_service is None:
        _binding_service = IdentityBindingService(get_ledger_store())
    return _binding_service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _ledger_store
    global _identifier_generator
    global _change_feed
    global _report_log
    global _product_ledger
    global _query_service
    global _binding_service

    _ledger_store = None
    _identifier_generator = None
    _change_feed = None
    _report_log = None
    _product_ledger = None
    _query_service = None
    _binding_service = None


__all__ = [
    # Factory functions
    "get_ledger_store",
    "get_identifier_generator",
    "get_change_feed",
    "get_report_log",
    "get_product_ledger",
    "get_query_service",
    "get_identity_binding_service",
    # Reset
    "reset_services",
]
