"""Tests for ReportLog."""

from unittest.mock import AsyncMock

import pytest

from src.core.entities import CounterfeitReport, ProductRecord, ReportFilter
from src.core.services import ReportLog
from src.infrastructure.storage.memory import InMemoryLedgerStore


def _report(product_id: int, reason: str, product_name: str, manufacturer: str) -> CounterfeitReport:
    return CounterfeitReport(
        product_id=product_id,
        reason=reason,
        reporter_identity="0xreporter",
        product_name=product_name,
        manufacturer_name=manufacturer,
    )


@pytest.fixture
async def report_log() -> ReportLog:
    log = ReportLog(InMemoryLedgerStore())
    await log.append(_report(1, "Duplicate QR code", "Premium Smartphone", "TechCorp"))
    await log.append(_report(12, "Fake stitching", "Designer Handbag", "LuxBrand"))
    await log.append(_report(2, "Wrong serial font", "Smart Watch", "TechCorp"))
    return log


class TestAppend:
    async def test_no_deduplication(self):
        log = ReportLog(InMemoryLedgerStore())
        first = await log.append(_report(1, "same", "P", "M"))
        second = await log.append(_report(1, "same", "P", "M"))

        assert first.report_id != second.report_id
        assert await log.count() == 2

    async def test_flagged_product_goes_through_record_report(self):
        store = AsyncMock()
        report = _report(1, "r", "P", "M")
        store.record_report.return_value = report.model_copy(update={"report_id": 1})
        product = ProductRecord(
            product_id=1,
            identifier="PRD-A-B",
            product_name="P",
            manufacturer_name="M",
            manufacturer_identity="0xm",
            current_owner="0xm",
            is_authentic=False,
        )

        stored = await ReportLog(store).append(report, flagged_product=product)

        store.record_report.assert_awaited_once_with(product, report)
        store.append_report.assert_not_called()
        assert stored.report_id == 1


class TestQuery:
    async def test_insertion_order_by_default(self, report_log):
        reports = await report_log.query()
        assert [r.product_id for r in reports] == [1, 12, 2]

    async def test_newest_first(self, report_log):
        reports = await report_log.query(newest_first=True)
        assert [r.product_id for r in reports] == [2, 12, 1]

    async def test_product_id_substring(self, report_log):
        reports = await report_log.query(ReportFilter(product_id="1"))
        assert [r.product_id for r in reports] == [1, 12]

    async def test_manufacturer_case_insensitive(self, report_log):
        reports = await report_log.query(ReportFilter(manufacturer="techcorp"))
        assert [r.product_id for r in reports] == [1, 2]

    async def test_terms_are_and_combined(self, report_log):
        reports = await report_log.query(ReportFilter(manufacturer="tech", reason="serial"))
        assert [r.product_id for r in reports] == [2]

    async def test_search_matches_any_display_field(self, report_log):
        by_name = await report_log.query(ReportFilter(search="handbag"))
        by_reason = await report_log.query(ReportFilter(search="duplicate"))
        by_manufacturer = await report_log.query(ReportFilter(search="LUX"))

        assert [r.product_id for r in by_name] == [12]
        assert [r.product_id for r in by_reason] == [1]
        assert [r.product_id for r in by_manufacturer] == [12]

    async def test_no_match(self, report_log):
        assert await report_log.query(ReportFilter(reason="nothing like this")) == []
