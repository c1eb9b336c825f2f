"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.config import get_settings, reset_settings
from src.config.settings import LedgerSettings, Settings, StorageSettings


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.app_name == "Product Authenticity Ledger"
        assert settings.ledger.identifier_suffix_length == 9
        assert settings.ledger.seed_demo is False

    def test_storage_from_env(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        monkeypatch.setenv("STORAGE_DATA_DIR", "/tmp/ledger-data")
        monkeypatch.setenv("STORAGE_DB_NAME", "custom.db")

        storage = StorageSettings()

        assert storage.backend == "memory"
        assert storage.db_path == Path("/tmp/ledger-data/custom.db")

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_ledger_from_env(self, monkeypatch):
        monkeypatch.setenv("LEDGER_SEED_DEMO", "true")
        monkeypatch.setenv("LEDGER_MAX_REGISTER_RETRIES", "3")

        ledger = LedgerSettings()

        assert ledger.seed_demo is True
        assert ledger.max_register_retries == 3

    def test_suffix_length_bounds(self, monkeypatch):
        monkeypatch.setenv("LEDGER_IDENTIFIER_SUFFIX_LENGTH", "4")
        with pytest.raises(ValidationError):
            LedgerSettings()

    def test_get_settings_is_cached_until_reset(self):
        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
