"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.demo_seed import seed_demo_products
from src.core.services.identifier_generator import (
    DEMO_AUTHENTIC_IDENTIFIER,
    DEMO_COUNTERFEIT_IDENTIFIER,
    IDENTIFIER_PATTERN,
    IdentifierGenerator,
)
from src.core.services.identity_binding import IdentityBindingService
from src.core.services.ledger_events import LedgerChangeFeed
from src.core.services.ledger_queries import LedgerQueryService
from src.core.services.product_ledger import ProductLedger
from src.core.services.report_log import ReportLog

__all__ = [
    # Identifiers
    "IdentifierGenerator",
    "IDENTIFIER_PATTERN",
    "DEMO_AUTHENTIC_IDENTIFIER",
    "DEMO_COUNTERFEIT_IDENTIFIER",
    # Ledger
    "ProductLedger",
    "ReportLog",
    "LedgerChangeFeed",
    "LedgerQueryService",
    # Identity
    "IdentityBindingService",
    # Seed
    "seed_demo_products",
]
