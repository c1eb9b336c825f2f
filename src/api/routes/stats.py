"""
Ledger statistics and regulator export endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.dependencies import (
    get_caller,
    get_export_compliance_use_case,
    get_queries,
    get_report_filter,
)
from src.application.dto.responses import AuthenticityStatsResponse, ErrorResponse
from src.application.use_cases import ExportComplianceUseCase, export_filename
from src.core.entities.identity import Caller
from src.core.entities.ledger import ReportFilter
from src.core.services import LedgerQueryService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats/authenticity", response_model=AuthenticityStatsResponse)
async def authenticity_stats(
    queries: LedgerQueryService = Depends(get_queries),
) -> AuthenticityStatsResponse:
    """Authentic vs flagged product counts."""
    counts = await queries.counts_by_authenticity()
    return AuthenticityStatsResponse(
        authentic=counts.authentic,
        flagged=counts.flagged,
        total=counts.total,
    )


@router.get(
    "/compliance/export",
    responses={
        200: {"description": "Compliance report JSON document"},
        403: {"model": ErrorResponse},
    },
)
async def export_compliance(
    caller: Caller = Depends(get_caller),
    report_filter: ReportFilter = Depends(get_report_filter),
    use_case: ExportComplianceUseCase = Depends(get_export_compliance_use_case),
) -> JSONResponse:
    """
    Download the compliance snapshot.

    Regulators only. Served as a JSON attachment with camelCase keys.
    The `/api/reports` filters narrow the listed reports; counts stay ledger-wide.
    """
    snapshot = await use_case.execute(caller, report_filter)
    return JSONResponse(
        content=use_case.to_document(snapshot),
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(snapshot.generated_at)}"'
        },
    )
