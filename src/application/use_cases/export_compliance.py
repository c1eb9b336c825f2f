"""Export Compliance Use Case: regulator snapshot of the ledger and its reports."""

from datetime import UTC, datetime

from src.application.authorization import require_role
from src.config import get_logger
from src.core.entities.identity import Caller, CallerRole
from src.core.entities.ledger import ComplianceSnapshot, ReportFilter
from src.core.services import LedgerQueryService

logger = get_logger(__name__)


def export_filename(generated_at: datetime | None = None) -> str:
    """Attachment name for an export, e.g. counterfeit-report-2024-05-01.json."""
    stamp = (generated_at or datetime.now(UTC)).date().isoformat()
    return f"counterfeit-report-{stamp}.json"


class ExportComplianceUseCase:
    """Build the regulator compliance document."""

    def __init__(self, queries: LedgerQueryService | None = None):
        self._queries = queries

    def _get_queries(self) -> LedgerQueryService:
        if self._queries is None:
            from src.application.services import get_query_service

            self._queries = get_query_service()
        return self._queries

    async def execute(
        self, caller: Caller, report_filter: ReportFilter | None = None
    ) -> ComplianceSnapshot:
        """
        Raises:
            PermissionDeniedError: caller is not a regulator
        """
        require_role(caller, "export compliance reports", CallerRole.REGULATOR)
        snapshot = await self._get_queries().compliance_snapshot(report_filter)
        logger.info(
            "compliance_exported",
            caller_id=caller.caller_id,
            total_products=snapshot.total_products,
            flagged=snapshot.flagged_count,
            listed_reports=len(snapshot.reports),
        )
        return snapshot

    def to_document(self, snapshot: ComplianceSnapshot) -> dict:
        return snapshot.to_document()
