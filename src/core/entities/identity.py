"""Caller and custodian identity entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class CallerRole(str, Enum):
    """Role tag supplied by the external auth collaborator."""

    MANUFACTURER = "manufacturer"
    DISTRIBUTOR = "distributor"
    CONSUMER = "consumer"
    REGULATOR = "regulator"


class Caller(BaseModel):
    """Authenticated caller: opaque id plus role, never a custodian by itself."""

    caller_id: str
    role: CallerRole


class CustodianBinding(BaseModel):
    """Auditable link from an authenticated caller to an on-ledger custodian."""

    binding_id: int | None = None
    caller_id: str
    role: CallerRole
    custodian: str
    bound_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
