"""
Domain exceptions for the product ledger.

Every failure carries a machine-readable code so callers (dashboards,
the HTTP layer) can render distinct messaging per kind. An unregistered
identifier is NOT an exception; it is a verification outcome.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(LedgerError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Ledger operation exceptions
class LedgerOperationError(LedgerError):
    """Base exception for rejected ledger operations."""

    pass


class DuplicateIdentifierError(LedgerOperationError):
    """Identifier already issued to another product."""

    def __init__(self, identifier: str, existing_id: int | None = None):
        super().__init__(
            f"Identifier already registered: {identifier}",
            code="DUPLICATE_IDENTIFIER",
            details={"identifier": identifier, "existing_id": existing_id},
        )
        self.identifier = identifier


class ProductNotFoundError(LedgerOperationError):
    """Product does not exist in the ledger."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class NotOwnerError(LedgerOperationError):
    """Transfer attempted by a party that is not the current custodian."""

    def __init__(self, product_id: int, caller: str):
        super().__init__(
            f"{caller} is not the current owner of product {product_id}",
            code="NOT_OWNER",
            details={"product_id": product_id, "caller": caller},
        )


class ProductFlaggedError(LedgerOperationError):
    """Transfer attempted on a product reported as counterfeit."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product {product_id} is flagged as counterfeit and cannot be transferred",
            code="PRODUCT_FLAGGED",
            details={"product_id": product_id},
        )


# Validation Exceptions
class ValidationError(LedgerError):
    """Input validation failed."""

    def __init__(self, field: str, reason: str, code: str = "VALIDATION_ERROR"):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            code=code,
            details={"field": field, "reason": reason},
        )
        self.field = field


class InvalidInputError(ValidationError):
    """Required operation input missing or malformed."""

    def __init__(self, field: str, reason: str):
        super().__init__(field, reason, code="INVALID_INPUT")


class PermissionDeniedError(LedgerError):
    """Caller role is not allowed to perform the operation."""

    def __init__(self, operation: str, role: str, required: str):
        super().__init__(
            f"Role '{role}' may not {operation}; requires '{required}'",
            code="PERMISSION_DENIED",
            details={"operation": operation, "role": role, "required": required},
        )


class ConfigurationError(LedgerError):
    """Configuration is invalid or missing."""

    pass
