"""Register Product Use Case."""

from src.application.authorization import require_role
from src.application.dto.requests import RegisterProductRequest
from src.application.dto.responses import ProductResponse
from src.config import get_logger
from src.core.entities.identity import Caller, CallerRole
from src.core.entities.product import ProductRecord
from src.core.services import IdentityBindingService, ProductLedger

logger = get_logger(__name__)


class RegisterProductUseCase:
    """Register a product under a supplied or generated identifier."""

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

    async def execute(self, caller: Caller, request: RegisterProductRequest) -> ProductRecord:
        """
        Register a product for the calling manufacturer.

        Raises:
            PermissionDeniedError: caller is not a manufacturer
            InvalidInputError: malformed product data
            DuplicateIdentifierError: supplied identifier already issued
        """
        require_role(caller, "register products", CallerRole.MANUFACTURER)

        manufacturer = await self._get_bindings().resolve(caller)
        ledger = self._get_ledger()

        logger.info(
            "register_product_started",
            caller_id=caller.caller_id,
            identifier_supplied=request.identifier is not None,
        )

        if request.identifier:
            return await ledger.register(
                manufacturer_identity=manufacturer,
                product_name=request.product_name,
                manufacturer_name=request.manufacturer_name,
                identifier=request.identifier,
                price=request.price,
                product_type=request.product_type,
                description=request.description,
            )

        return await ledger.register_generated(
            manufacturer_identity=manufacturer,
            product_name=request.product_name,
            manufacturer_name=request.manufacturer_name,
            price=request.price,
            product_type=request.product_type,
            description=request.description,
        )

    def to_response(self, product: ProductRecord) -> ProductResponse:
        """Convert result to API response."""
        return ProductResponse.from_entity(product)
