"""
Identity binding endpoints.

Link an authenticated caller to the custodian identity that holds
products on the ledger.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_bind_identity_use_case, get_caller
from src.application.dto.requests import BindIdentityRequest
from src.application.dto.responses import BindingHistoryResponse, BindingResponse, ErrorResponse
from src.application.use_cases import BindIdentityUseCase
from src.core.entities.identity import Caller

router = APIRouter(prefix="/api/identities", tags=["identities"])


@router.post(
    "/bindings",
    response_model=BindingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def bind_identity(
    request: BindIdentityRequest,
    caller: Caller = Depends(get_caller),
    use_case: BindIdentityUseCase = Depends(get_bind_identity_use_case),
) -> BindingResponse:
    """Bind the calling identity to a custodian. The latest binding wins."""
    binding = await use_case.execute(caller, request)
    return use_case.to_response(binding)


@router.get("/bindings/{caller_id}", response_model=BindingHistoryResponse)
async def get_bindings(
    caller_id: str,
    use_case: BindIdentityUseCase = Depends(get_bind_identity_use_case),
) -> BindingHistoryResponse:
    """Binding history and the custodian currently acting for a caller."""
    return await use_case.history(caller_id)
