"""
Counterfeit report log.

Append-only. Multiple reports against one product accumulate; nothing
is deduplicated, edited or deleted.
"""

from __future__ import annotations

from src.config import get_logger
from src.core.entities.ledger import ReportFilter
from src.core.entities.product import CounterfeitReport, ProductRecord
from src.core.interfaces.ledger_store import ILedgerStore

logger = get_logger(__name__)


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


class ReportLog:
    """Append and query counterfeit reports."""

    def __init__(self, store: ILedgerStore) -> None:
        self._store = store

    async def append(
        self,
        report: CounterfeitReport,
        flagged_product: ProductRecord | None = None,
    ) -> CounterfeitReport:
        """
        Insert a report.

        When flagged_product is given, its authenticity flag is persisted
        in the same store write as the report.
        """
        if flagged_product is not None:
            stored = await self._store.record_report(flagged_product, report)
        else:
            stored = await self._store.append_report(report)

        logger.info(
            "report_appended",
            report_id=stored.report_id,
            product_id=stored.product_id,
        )
        return stored

    async def query(
        self,
        report_filter: ReportFilter | None = None,
        newest_first: bool = False,
    ) -> list[CounterfeitReport]:
        """
        Filter reports by case-insensitive substring, terms AND-combined.

        Insertion order (oldest first) unless newest_first.
        """
        reports = await self._store.scan_reports()
        if report_filter is not None and not report_filter.is_empty:
            reports = [r for r in reports if self.matches(r, report_filter)]
        if newest_first:
            reports.reverse()
        return reports

    async def count(self) -> int:
        return await self._store.count_reports()

    @staticmethod
    def matches(report: CounterfeitReport, report_filter: ReportFilter) -> bool:
        """Check a single report against a filter."""
        if report_filter.product_id and not _contains(
            str(report.product_id), report_filter.product_id
        ):
            return False
        if report_filter.manufacturer and not _contains(
            report.manufacturer_name, report_filter.manufacturer
        ):
            return False
        if report_filter.reason and not _contains(report.reason, report_filter.reason):
            return False
        if report_filter.search:
            term = report_filter.search
            if not (
                _contains(report.product_name, term)
                or _contains(report.manufacturer_name, term)
                or _contains(report.reason, term)
            ):
                return False
        return True
