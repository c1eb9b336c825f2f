"""Tests for IdentifierGenerator."""

import json

import pytest

from src.core.services import (
    DEMO_AUTHENTIC_IDENTIFIER,
    DEMO_COUNTERFEIT_IDENTIFIER,
    IdentifierGenerator,
)
from src.core.services.identifier_generator import to_base36


class TestBase36:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0"), (35, "Z"), (36, "10"), (1295, "ZZ"), (46656, "1000")],
    )
    def test_encoding(self, value, expected):
        assert to_base36(value) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_base36(-1)


class TestGenerate:
    def test_format(self):
        generator = IdentifierGenerator(clock=lambda: 1714557600.0)
        identifier = generator.generate()

        prefix, stamp, suffix = identifier.split("-")
        assert prefix == "PRD"
        assert int(stamp, 36) == 1714557600000
        assert len(suffix) == 9
        assert IdentifierGenerator.is_valid(identifier)

    def test_custom_suffix_length(self):
        identifier = IdentifierGenerator(suffix_length=12).generate()
        assert len(identifier.split("-")[2]) == 12

    def test_suffix_length_minimum(self):
        with pytest.raises(ValueError):
            IdentifierGenerator(suffix_length=4)

    def test_identifiers_differ(self):
        generator = IdentifierGenerator()
        assert len({generator.generate() for _ in range(200)}) == 200


class TestValidation:
    @pytest.mark.parametrize(
        "identifier",
        ["PRD-LZ3K9Q1A-7F2KD9XQ1", DEMO_AUTHENTIC_IDENTIFIER, DEMO_COUNTERFEIT_IDENTIFIER],
    )
    def test_valid(self, identifier):
        assert IdentifierGenerator.is_valid(identifier)

    @pytest.mark.parametrize(
        "identifier",
        ["", "PRD-", "PRD-ABC", "prd-abc-123", "XYZ-ABC-123", "PRD-ABC-12 3", "PRD-A-B-C"],
    )
    def test_invalid(self, identifier):
        assert not IdentifierGenerator.is_valid(identifier)

    def test_normalize(self):
        assert IdentifierGenerator.normalize("  prd-lz3k-abc ") == "PRD-LZ3K-ABC"


class TestParseScan:
    def test_bare_identifier(self):
        assert IdentifierGenerator().parse_scan("prd-abc-123") == "PRD-ABC-123"

    def test_json_payload(self):
        payload = json.dumps({"qrCode": "PRD-ABC-123", "timestamp": 1714557600000})
        assert IdentifierGenerator().parse_scan(payload) == "PRD-ABC-123"

    @pytest.mark.parametrize(
        "payload",
        [
            json.dumps({"qrCode": "PRD-ABC-123"}),
            json.dumps({"timestamp": 1}),
            json.dumps(["PRD-ABC-123"]),
            "   ",
        ],
    )
    def test_unusable_payload(self, payload):
        assert IdentifierGenerator().parse_scan(payload) is None

    def test_qr_payload_parses_back(self):
        generator = IdentifierGenerator(clock=lambda: 1714557600.0)
        payload = generator.qr_payload("PRD-ABC-123", manufacturer="TechCorp", product_id=4)

        data = json.loads(payload)
        assert data == {
            "qrCode": "PRD-ABC-123",
            "timestamp": 1714557600000,
            "productId": 4,
            "manufacturer": "TechCorp",
        }
        assert generator.parse_scan(payload) == "PRD-ABC-123"
