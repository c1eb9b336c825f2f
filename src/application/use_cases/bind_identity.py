"""Bind Identity Use Case: link callers to custodian identities."""

from src.application.dto.requests import BindIdentityRequest
from src.application.dto.responses import BindingHistoryResponse, BindingResponse
from src.core.entities.identity import Caller, CallerRole, CustodianBinding
from src.core.services import IdentityBindingService


class BindIdentityUseCase:
    """Create and inspect caller-to-custodian bindings."""

    def __init__(self, bindings: IdentityBindingService | None = None):
        self._bindings = bindings

    def _get_bindings(self) -> IdentityBindingService:
        if self._bindings is None:
            from src.application.services import get_identity_binding_service

            self._bindings = get_identity_binding_service()
        return self._bindings

    async def execute(self, caller: Caller, request: BindIdentityRequest) -> CustodianBinding:
        """Bind the calling identity; callers can only bind themselves."""
        return await self._get_bindings().bind(caller.caller_id, caller.role, request.custodian)

    async def history(self, caller_id: str) -> BindingHistoryResponse:
        service = self._get_bindings()
        bindings = await service.history(caller_id)
        # Role does not affect resolution
        current = await service.resolve(Caller(caller_id=caller_id, role=CallerRole.CONSUMER))
        return BindingHistoryResponse(
            caller_id=caller_id,
            current_custodian=current,
            bindings=[BindingResponse.from_entity(b) for b in bindings],
        )

    def to_response(self, binding: CustodianBinding) -> BindingResponse:
        """Convert result to API response."""
        return BindingResponse.from_entity(binding)
