"""In-memory storage implementations."""

from src.infrastructure.storage.memory.ledger_store import InMemoryLedgerStore

__all__ = ["InMemoryLedgerStore"]
