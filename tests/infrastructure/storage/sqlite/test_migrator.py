"""Tests for the schema migrator."""

from pathlib import Path

from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestDiscovery:
    def test_ledger_migration_found(self):
        migrations = discover_migrations()
        assert [m.version for m in migrations][0] == "001"
        assert migrations[0].name == "ledger"
        assert len(migrations[0].checksum) == 16

    def test_invalid_filename(self, tmp_path: Path):
        bad = tmp_path / "ledger.sql"
        bad.write_text("SELECT 1;")
        try:
            MigrationInfo.from_file(bad)
        except ValueError as e:
            assert "Invalid migration filename" in str(e)
        else:
            raise AssertionError("expected ValueError")


class TestInitializeDatabase:
    async def test_fresh_database(self, tmp_path: Path):
        db_path = tmp_path / "fresh.db"

        results = await initialize_database(db_path, create_backup_before=False)

        assert [r.version for r in results] == ["001"]
        assert all(r.success for r in results)
        status = await get_migration_status(db_path)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_rerun_is_noop(self, tmp_path: Path):
        db_path = tmp_path / "again.db"
        await initialize_database(db_path, create_backup_before=False)

        assert await initialize_database(db_path) == []
        # Successful run removes its backup
        assert list(tmp_path.glob("*.backup_*")) == []

    async def test_status_of_missing_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "missing.db")
        assert status["exists"] is False
        assert "001" in status["pending_migrations"]

    async def test_schema_integrity(self, tmp_path: Path):
        db_path = tmp_path / "checked.db"
        await initialize_database(db_path, create_backup_before=False)

        checks = {c["check"]: c for c in await verify_schema_integrity(db_path)}

        assert checks["integrity"]["status"] == "PASS"
        assert checks["foreign_keys"]["status"] == "PASS"
        assert checks["required_tables"]["missing"] == []
        assert "custodian_bindings" in REQUIRED_TABLES
