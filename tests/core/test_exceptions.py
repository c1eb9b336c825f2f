"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    DuplicateIdentifierError,
    InvalidInputError,
    LedgerError,
    LedgerOperationError,
    NotOwnerError,
    PermissionDeniedError,
    ProductFlaggedError,
    ProductNotFoundError,
    StorageError,
    ValidationError,
)


class TestLedgerError:
    """Tests for base LedgerError exception."""

    def test_basic_initialization(self):
        error = LedgerError("Something failed")
        assert str(error) == "Something failed"
        assert error.message == "Something failed"
        assert error.code == "LedgerError"
        assert error.details == {}

    def test_custom_code_and_details(self):
        error = LedgerError("Bad", code="CUSTOM", details={"key": "value"})
        assert error.code == "CUSTOM"
        assert error.details == {"key": "value"}

    def test_to_dict(self):
        error = LedgerError("Bad", code="CUSTOM", details={"a": 1})
        assert error.to_dict() == {
            "error": "CUSTOM",
            "message": "Bad",
            "details": {"a": 1},
        }

    def test_can_be_raised_and_caught(self):
        with pytest.raises(LedgerError) as exc_info:
            raise LedgerError("Raised")
        assert exc_info.value.message == "Raised"


class TestStorageErrors:
    def test_database_error(self):
        error = DatabaseError("insert_product", "disk full")
        assert isinstance(error, StorageError)
        assert error.code == "DATABASE_ERROR"
        assert "insert_product" in error.message
        assert error.details == {"operation": "insert_product", "error": "disk full"}


class TestLedgerOperationErrors:
    """Each rejected operation has a distinct code."""

    def test_duplicate_identifier(self):
        error = DuplicateIdentifierError("PRD-ABC-123", existing_id=7)
        assert isinstance(error, LedgerOperationError)
        assert error.code == "DUPLICATE_IDENTIFIER"
        assert error.identifier == "PRD-ABC-123"
        assert error.details["existing_id"] == 7

    def test_product_not_found(self):
        error = ProductNotFoundError(42)
        assert error.code == "PRODUCT_NOT_FOUND"
        assert "42" in error.message
        assert error.details == {"product_id": 42}

    def test_not_owner(self):
        error = NotOwnerError(3, "0xabc")
        assert error.code == "NOT_OWNER"
        assert error.details == {"product_id": 3, "caller": "0xabc"}

    def test_product_flagged(self):
        error = ProductFlaggedError(3)
        assert error.code == "PRODUCT_FLAGGED"
        assert "counterfeit" in error.message

    @pytest.mark.parametrize(
        "error",
        [
            DuplicateIdentifierError("PRD-A-B"),
            ProductNotFoundError(1),
            NotOwnerError(1, "x"),
            ProductFlaggedError(1),
        ],
    )
    def test_all_are_ledger_errors(self, error):
        assert isinstance(error, LedgerError)


class TestValidationErrors:
    def test_validation_error(self):
        error = ValidationError("price", "must be positive")
        assert error.code == "VALIDATION_ERROR"
        assert error.field == "price"
        assert error.details == {"field": "price", "reason": "must be positive"}

    def test_invalid_input_error(self):
        error = InvalidInputError("location", "is required")
        assert isinstance(error, ValidationError)
        assert error.code == "INVALID_INPUT"
        assert error.message == "Validation failed for location: is required"


class TestOtherErrors:
    def test_permission_denied(self):
        error = PermissionDeniedError("register products", "consumer", "manufacturer")
        assert error.code == "PERMISSION_DENIED"
        assert "consumer" in error.message
        assert error.details["required"] == "manufacturer"

    def test_configuration_error(self):
        error = ConfigurationError("Unknown backend", code="UNKNOWN_BACKEND")
        assert error.code == "UNKNOWN_BACKEND"
