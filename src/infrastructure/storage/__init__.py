"""Storage infrastructure implementations."""

from src.core.exceptions import ConfigurationError
from src.core.interfaces.ledger_store import ILedgerStore
from src.infrastructure.storage.memory import InMemoryLedgerStore
from src.infrastructure.storage.sqlite import (
    SQLiteLedgerStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)


def create_ledger_store(backend: str) -> ILedgerStore:
    """Build the ledger store for a configured backend name."""
    if backend == "memory":
        return InMemoryLedgerStore()
    if backend == "sqlite":
        return SQLiteLedgerStore()
    raise ConfigurationError(f"Unknown storage backend: {backend}", code="UNKNOWN_BACKEND")


__all__ = [
    # Stores
    "InMemoryLedgerStore",
    "SQLiteLedgerStore",
    "create_ledger_store",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
