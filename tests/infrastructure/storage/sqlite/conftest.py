"""Fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from src.infrastructure.storage.sqlite import SQLiteLedgerStore, close_pool, configure_pool
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def sqlite_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated database file with the global pool pointed at it."""
    db_path = tmp_path / "ledger.db"
    await initialize_database(db_path, create_backup_before=False)
    configure_pool(db_path, pool_size=2)
    yield db_path
    await close_pool()


@pytest.fixture
def sqlite_store(sqlite_db: Path) -> SQLiteLedgerStore:
    return SQLiteLedgerStore()
