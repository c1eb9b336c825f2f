"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    configure_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore

# Names used by the API lifespan and the CLI
get_connection_pool = get_pool
close_connection_pool = close_pool


__all__ = [
    # Connection
    "ConnectionPool",
    "configure_pool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteLedgerStore",
]
