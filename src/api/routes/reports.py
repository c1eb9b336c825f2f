"""
Counterfeit report endpoints.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_queries, get_report_filter, get_reports
from src.application.dto.responses import (
    CounterfeitReportResponse,
    EnrichedReportListResponse,
    EnrichedReportResponse,
    ReportListResponse,
)
from src.core.entities.ledger import ReportFilter
from src.core.services import LedgerQueryService, ReportLog

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("", response_model=ReportListResponse)
async def list_reports(
    newest_first: bool = False,
    report_filter: ReportFilter = Depends(get_report_filter),
    report_log: ReportLog = Depends(get_reports),
) -> ReportListResponse:
    """
    Query the report log.

    Filters: `product_id`, `manufacturer`, `reason` and `search`.
    All are case-insensitive substring matches and AND-combined.
    `search` matches product name, manufacturer or reason.
    """
    reports = await report_log.query(report_filter, newest_first=newest_first)
    return ReportListResponse(
        reports=[CounterfeitReportResponse.from_entity(r) for r in reports],
        total=len(reports),
    )


@router.get("/enriched", response_model=EnrichedReportListResponse)
async def list_enriched_reports(
    newest_first: bool = False,
    report_filter: ReportFilter = Depends(get_report_filter),
    queries: LedgerQueryService = Depends(get_queries),
) -> EnrichedReportListResponse:
    """Reports joined with current product data."""
    reports = await queries.enriched_reports(report_filter, newest_first=newest_first)
    return EnrichedReportListResponse(
        reports=[EnrichedReportResponse.from_entity(r) for r in reports],
        total=len(reports),
    )
