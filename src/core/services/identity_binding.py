"""
Caller-to-custodian identity bindings.

An authenticated caller (from the external auth collaborator) is not a
custodian by itself. Bindings are append-only so every change of
custodian for a caller stays auditable; the latest one wins.
"""

from __future__ import annotations

from src.config import get_logger
from src.core.entities.identity import Caller, CallerRole, CustodianBinding
from src.core.exceptions import InvalidInputError
from src.core.interfaces.ledger_store import ILedgerStore

logger = get_logger(__name__)


class IdentityBindingService:
    """Bind callers to on-ledger custodian identities and resolve them."""

    def __init__(self, store: ILedgerStore) -> None:
        self._store = store

    async def bind(
        self,
        caller_id: str,
        role: CallerRole | str,
        custodian: str,
    ) -> CustodianBinding:
        caller_id = (caller_id or "").strip()
        custodian = (custodian or "").strip()
        if not caller_id:
            raise InvalidInputError("caller_id", "is required")
        if not custodian:
            raise InvalidInputError("custodian", "is required")
        try:
            role = CallerRole(role)
        except ValueError:
            raise InvalidInputError("role", f"unknown role '{role}'") from None

        binding = await self._store.put_binding(
            CustodianBinding(caller_id=caller_id, role=role, custodian=custodian)
        )
        logger.info(
            "custodian_bound",
            caller_id=caller_id,
            role=role.value,
            custodian=custodian,
            binding_id=binding.binding_id,
        )
        return binding

    async def resolve(self, caller: Caller) -> str:
        """
        Custodian identity acting for `caller`.

        Without an explicit binding the caller id is used as-is.
        """
        bindings = await self._store.get_bindings(caller.caller_id)
        if bindings:
            return bindings[-1].custodian

        logger.debug("custodian_implicit", caller_id=caller.caller_id)
        return caller.caller_id

    async def history(self, caller_id: str) -> list[CustodianBinding]:
        return await self._store.get_bindings(caller_id.strip())
