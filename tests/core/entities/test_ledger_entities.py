"""Unit tests for read-side ledger entities."""

from datetime import UTC, datetime

from src.core.entities import (
    AuthenticityCounts,
    Caller,
    CallerRole,
    ComplianceSnapshot,
    EnrichedReport,
    ReportFilter,
)


class TestReportFilter:
    def test_empty(self):
        assert ReportFilter().is_empty
        assert ReportFilter(reason="").is_empty

    def test_not_empty(self):
        assert not ReportFilter(search="bag").is_empty


class TestAuthenticityCounts:
    def test_total(self):
        assert AuthenticityCounts(authentic=3, flagged=2).total == 5


class TestComplianceSnapshot:
    def test_document_uses_camel_case_keys(self):
        report = EnrichedReport(
            report_id=1,
            product_id=2,
            identifier="PRD-A-B",
            reason="Fake stitching",
            reporter_identity="0xreg",
            timestamp=datetime(2024, 5, 1, tzinfo=UTC),
            product_name="Designer Handbag",
            manufacturer_name="LuxBrand",
            is_authentic=False,
        )
        snapshot = ComplianceSnapshot(
            total_products=2,
            authentic_count=1,
            flagged_count=1,
            report_count=1,
            reports=[report],
        )

        document = snapshot.to_document()

        assert set(document) == {
            "generatedAt",
            "totalProducts",
            "authenticCount",
            "flaggedCount",
            "reportCount",
            "reports",
        }
        assert document["reports"][0]["productName"] == "Designer Handbag"
        assert document["reports"][0]["isAuthentic"] is False
        assert isinstance(document["generatedAt"], str)

    def test_populate_by_field_name(self):
        report = EnrichedReport(
            product_id=1,
            reason="r",
            reporter_identity="x",
            timestamp=datetime.now(UTC),
        )
        assert report.product_name == "Unknown Product"
        assert report.manufacturer_name == "Unknown Manufacturer"
        assert report.is_authentic is None


class TestCaller:
    def test_role_from_string(self):
        caller = Caller(caller_id="user-1", role="regulator")
        assert caller.role is CallerRole.REGULATOR
