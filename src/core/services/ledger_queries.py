"""
Read-only query and aggregation layer.

Everything here is derived on demand from the store and the report log;
no derived state is persisted.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.config import get_logger
from src.core.entities.ledger import (
    UNKNOWN_MANUFACTURER,
    UNKNOWN_PRODUCT,
    AuthenticityCounts,
    ComplianceSnapshot,
    EnrichedReport,
    LedgerChange,
    ReportFilter,
)
from src.core.entities.product import CounterfeitReport, ProductRecord
from src.core.exceptions import StorageError
from src.core.interfaces.ledger_store import ILedgerStore
from src.core.services.ledger_events import LedgerChangeFeed
from src.core.services.report_log import ReportLog

logger = get_logger(__name__)


def _same(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


class LedgerQueryService:
    """Dashboard-facing projections over the ledger."""

    def __init__(
        self,
        store: ILedgerStore,
        report_log: ReportLog | None = None,
        change_feed: LedgerChangeFeed | None = None,
    ) -> None:
        self._store = store
        self._report_log = report_log or ReportLog(store)
        self._change_feed = change_feed or LedgerChangeFeed()

    async def all_products(self) -> list[ProductRecord]:
        return await self._store.scan_products()

    async def by_owner(self, identity: str) -> list[ProductRecord]:
        """Products whose current custodian is `identity`."""
        products = await self._store.scan_products()
        return [p for p in products if _same(p.current_owner, identity)]

    async def by_manufacturer(self, identity_or_name: str) -> list[ProductRecord]:
        """Products registered by a manufacturer identity or under a manufacturer name."""
        products = await self._store.scan_products()
        return [
            p
            for p in products
            if _same(p.manufacturer_identity, identity_or_name)
            or _same(p.manufacturer_name, identity_or_name)
        ]

    async def counts_by_authenticity(self) -> AuthenticityCounts:
        products = await self._store.scan_products()
        authentic = sum(1 for p in products if p.is_authentic)
        return AuthenticityCounts(authentic=authentic, flagged=len(products) - authentic)

    async def enriched_reports(
        self,
        report_filter: ReportFilter | None = None,
        newest_first: bool = False,
    ) -> list[EnrichedReport]:
        """
        Reports joined with current product data for display.

        Products that cannot be resolved fall back to placeholder names;
        lookup failures degrade instead of propagating.
        """
        reports = await self._report_log.query(report_filter, newest_first=newest_first)
        index = await self._product_index()
        return [self._enrich(report, index.get(report.product_id)) for report in reports]

    async def compliance_snapshot(
        self, report_filter: ReportFilter | None = None
    ) -> ComplianceSnapshot:
        """
        Aggregate export for regulators.

        Product counts and `report_count` cover the whole ledger; only the
        listed reports are narrowed by `report_filter`.
        """
        products = await self._store.scan_products()
        report_count = await self._report_log.count()
        reports = await self.enriched_reports(report_filter)
        authentic = sum(1 for p in products if p.is_authentic)

        snapshot = ComplianceSnapshot(
            total_products=len(products),
            authentic_count=authentic,
            flagged_count=len(products) - authentic,
            report_count=report_count,
            reports=reports,
        )
        logger.info(
            "compliance_snapshot_generated",
            total_products=snapshot.total_products,
            report_count=snapshot.report_count,
            listed_reports=len(reports),
        )
        return snapshot

    def changes_since(self, sequence: int = 0, limit: int = 100) -> list[LedgerChange]:
        """Polling contract for the change feed."""
        return self._change_feed.changes_since(sequence, limit)

    @property
    def latest_sequence(self) -> int:
        return self._change_feed.latest_sequence

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[asyncio.Queue[LedgerChange]]:
        """Push contract for the change feed."""
        async with self._change_feed.subscribe() as queue:
            yield queue

    async def _product_index(self) -> dict[int, ProductRecord]:
        try:
            products = await self._store.scan_products()
        except StorageError as e:
            logger.warning("report_enrichment_lookup_failed", error=str(e))
            return {}
        return {p.product_id: p for p in products}

    @staticmethod
    def _enrich(report: CounterfeitReport, product: ProductRecord | None) -> EnrichedReport:
        if product is None:
            return EnrichedReport(
                report_id=report.report_id,
                product_id=report.product_id,
                identifier=report.identifier,
                reason=report.reason,
                reporter_identity=report.reporter_identity,
                timestamp=report.timestamp,
                product_name=UNKNOWN_PRODUCT,
                manufacturer_name=UNKNOWN_MANUFACTURER,
            )
        return EnrichedReport(
            report_id=report.report_id,
            product_id=report.product_id,
            identifier=product.identifier,
            reason=report.reason,
            reporter_identity=report.reporter_identity,
            timestamp=report.timestamp,
            product_name=product.product_name or UNKNOWN_PRODUCT,
            manufacturer_name=product.manufacturer_name or UNKNOWN_MANUFACTURER,
            is_authentic=product.is_authentic,
        )
