"""Transfer Ownership Use Case."""

from src.application.dto.requests import TransferOwnershipRequest
from src.application.dto.responses import (
    CustodyEventResponse,
    ProductResponse,
    TransferResponse,
)
from src.config import get_logger
from src.core.entities.identity import Caller
from src.core.entities.product import TransferResult
from src.core.services import IdentityBindingService, ProductLedger

logger = get_logger(__name__)


class TransferOwnershipUseCase:
    """Hand custody of a product from the caller's custodian to a new owner."""

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
        request: TransferOwnershipRequest,
    ) -> TransferResult:
        """Open to any role; ownership is enforced by the ledger."""
        custodian = await self._get_bindings().resolve(caller)

        logger.info(
            "transfer_started",
            product_id=product_id,
            caller_id=caller.caller_id,
            custodian=custodian,
        )

        return await self._get_ledger().transfer_ownership(
            product_id=product_id,
            caller_identity=custodian,
            new_owner=request.new_owner or "",
            event_type=request.event_type,
            location=request.location or "",
        )

    def to_response(self, result: TransferResult) -> TransferResponse:
        """Convert result to API response."""
        return TransferResponse(
            product=ProductResponse.from_entity(result.product),
            event=CustodyEventResponse.from_entity(result.event),
        )
