"""Role gating for ledger operations.

Roles come from the external auth collaborator; the ledger itself only
sees custodian identities and never checks roles.
"""

from src.config import get_logger
from src.core.entities.identity import Caller, CallerRole
from src.core.exceptions import PermissionDeniedError

logger = get_logger(__name__)


def require_role(caller: Caller, operation: str, *allowed: CallerRole) -> None:
    """Raise PermissionDeniedError unless the caller holds one of `allowed`."""
    if caller.role in allowed:
        return

    required = " or ".join(role.value for role in allowed)
    logger.warning(
        "permission_denied",
        operation=operation,
        caller_id=caller.caller_id,
        role=caller.role.value,
        required=required,
    )
    raise PermissionDeniedError(operation, caller.role.value, required)
