"""Verify Product Use Case: tri-state lookup plus custody history."""

from dataclasses import dataclass, field

from src.application.dto.responses import (
    CustodyEventResponse,
    ProductResponse,
    VerificationResponse,
)
from src.config import get_logger
from src.core.entities.product import CustodyEvent, VerificationResult, VerificationStatus
from src.core.exceptions import InvalidInputError
from src.core.services import ProductLedger

logger = get_logger(__name__)

VERIFICATION_MESSAGES = {
    VerificationStatus.AUTHENTIC: "This product is verified and authentic",
    VerificationStatus.FLAGGED: "This product has been flagged as counterfeit",
    VerificationStatus.UNREGISTERED: "This QR code is invalid or not registered in our system",
}


@dataclass
class VerificationOutcome:
    """Verification result with the history needed to display it."""

    result: VerificationResult
    history: list[CustodyEvent] = field(default_factory=list)

    @property
    def message(self) -> str:
        return VERIFICATION_MESSAGES[self.result.status]


class VerifyProductUseCase:
    """Verify a presented identifier or scanned QR payload."""

    def __init__(self, ledger: ProductLedger | None = None):
        self._ledger = ledger

    def _get_ledger(self) -> ProductLedger:
        if self._ledger is None:
            from src.application.services import get_product_ledger

            self._ledger = get_product_ledger()
        return self._ledger

    async def execute(self, identifier: str) -> VerificationOutcome:
        """Verify a bare identifier. Unregistered is a result, not an error."""
        ledger = self._get_ledger()
        result = await ledger.verify(identifier)

        history: list[CustodyEvent] = []
        if result.product is not None:
            history = await ledger.get_history(result.product.product_id)

        return VerificationOutcome(result=result, history=history)

    async def execute_scan(self, payload: str) -> VerificationOutcome:
        """
        Verify decoded QR content.

        Raises:
            InvalidInputError: JSON payload without qrCode/timestamp
        """
        identifier = self._get_ledger().generator.parse_scan(payload)
        if identifier is None:
            logger.info("scan_payload_rejected", payload_length=len(payload or ""))
            raise InvalidInputError("payload", "not a product QR code payload")
        return await self.execute(identifier)

    def to_response(self, outcome: VerificationOutcome) -> VerificationResponse:
        """Convert result to API response."""
        result = outcome.result
        return VerificationResponse(
            identifier=result.identifier,
            status=result.status.value,
            message=outcome.message,
            product=ProductResponse.from_entity(result.product) if result.product else None,
            history=[CustodyEventResponse.from_entity(e) for e in outcome.history],
        )
