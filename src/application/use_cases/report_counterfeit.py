"""Report Counterfeit Use Case."""

from src.application.dto.requests import ReportCounterfeitRequest
from src.application.dto.responses import CounterfeitReportResponse
from src.config import get_logger
from src.core.entities.identity import Caller
from src.core.entities.product import CounterfeitReport
from src.core.services import IdentityBindingService, ProductLedger

logger = get_logger(__name__)


class ReportCounterfeitUseCase:
    """Flag a product as counterfeit on behalf of any caller."""

    def __init__(
        self,
        ledger: ProductLedger | None = None,
        bindings: IdentityBindingService | None = None,
    ):
        self._ledger = ledger
        self._bindings = bindings

    def _get_ledger(self) -> ProductLedger:
        if self._ledger is None:
            from src.application.services import get_product_ledger

            self._ledger = get_product_ledger()
        return self._ledger

    def _get_bindings(self) -> IdentityBindingService:
        if self._bindings is None:
            from src.application.services import get_identity_binding_service

            self._bindings = get_identity_binding_service()
        return self._bindings

    async def execute(
        self,
        caller: Caller,
        product_id: int,
        request: ReportCounterfeitRequest,
    ) -> CounterfeitReport:
        reporter = await self._get_bindings().resolve(caller)
        logger.info(
            "report_counterfeit_started",
            product_id=product_id,
            caller_id=caller.caller_id,
            role=caller.role.value,
        )
        return await self._get_ledger().report_counterfeit(
            product_id=product_id,
            reporter_identity=reporter,
            reason=request.reason or "",
        )

    def to_response(self, report: CounterfeitReport) -> CounterfeitReportResponse:
        """Convert result to API response."""
        return CounterfeitReportResponse.from_entity(report)
