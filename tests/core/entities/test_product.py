"""Unit tests for product ledger entities."""

from src.core.entities import (
    NULL_IDENTITY,
    TRANSFER_EVENT_TYPES,
    AuthenticityStatus,
    CustodyEventType,
    ProductRecord,
    VerificationResult,
    VerificationStatus,
)


def _product(**overrides) -> ProductRecord:
    data = {
        "product_id": 1,
        "identifier": "PRD-LZ3K9Q1A-7F2KD9XQ1",
        "product_name": "Premium Smartphone",
        "manufacturer_name": "TechCorp",
        "manufacturer_identity": "0xABCDEF",
        "current_owner": "0xABCDEF",
    }
    data.update(overrides)
    return ProductRecord(**data)


class TestProductRecord:
    def test_defaults(self):
        product = _product()
        assert product.is_authentic is True
        assert product.status == AuthenticityStatus.AUTHENTIC
        assert product.registered_at.tzinfo is not None

    def test_flagged_status(self):
        assert _product(is_authentic=False).status == AuthenticityStatus.FLAGGED

    def test_is_owned_by_is_case_insensitive(self):
        product = _product()
        assert product.is_owned_by("0xabcdef")
        assert product.is_owned_by("  0xABCDEF ")
        assert not product.is_owned_by("0x123456")


class TestCustodyEventType:
    def test_manufactured_is_not_a_transfer_type(self):
        assert CustodyEventType.MANUFACTURED not in TRANSFER_EVENT_TYPES
        assert TRANSFER_EVENT_TYPES == {
            CustodyEventType.DISTRIBUTED,
            CustodyEventType.SOLD,
            CustodyEventType.TRANSFERRED,
        }

    def test_values_are_uppercase(self):
        assert CustodyEventType("SOLD") is CustodyEventType.SOLD

    def test_null_identity(self):
        assert NULL_IDENTITY == "0x" + "0" * 40


class TestVerificationResult:
    def test_unregistered(self):
        result = VerificationResult.for_product("PRD-FAKE-123", None)
        assert result.status == VerificationStatus.UNREGISTERED
        assert result.product is None
        assert result.is_registered is False

    def test_authentic(self):
        result = VerificationResult.for_product("PRD-A-B", _product())
        assert result.status == VerificationStatus.AUTHENTIC
        assert result.is_registered is True

    def test_flagged(self):
        result = VerificationResult.for_product("PRD-A-B", _product(is_authentic=False))
        assert result.status == VerificationStatus.FLAGGED
        assert result.product is not None
