"""
Product ledger domain entities.

A ProductRecord is created once at registration and never deleted.
Custody events and counterfeit reports are append-only.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# "No prior owner" - only ever the source of the synthetic MANUFACTURED event
NULL_IDENTITY = "0x0000000000000000000000000000000000000000"

MANUFACTURING_LOCATION = "Factory"


class CustodyEventType(str, Enum):
    """Kinds of custody change."""

    MANUFACTURED = "MANUFACTURED"
    DISTRIBUTED = "DISTRIBUTED"
    SOLD = "SOLD"
    TRANSFERRED = "TRANSFERRED"


# MANUFACTURED is reserved for registration
TRANSFER_EVENT_TYPES = frozenset(
    {
        CustodyEventType.DISTRIBUTED,
        CustodyEventType.SOLD,
        CustodyEventType.TRANSFERRED,
    }
)


class AuthenticityStatus(str, Enum):
    """Authenticity state of a registered product."""

    AUTHENTIC = "authentic"
    FLAGGED = "flagged"


class ProductRecord(BaseModel):
    """
    One physical product instance.

    Descriptive metadata is fixed at registration. Only current_owner
    (by transfer) and is_authentic (True -> False, by report) change.
    """

    product_id: int
    identifier: str
    product_name: str
    manufacturer_name: str
    manufacturer_identity: str
    current_owner: str
    is_authentic: bool = True
    product_type: str | None = None
    description: str | None = None
    price: float | None = None
    registered_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def status(self) -> AuthenticityStatus:
        if self.is_authentic:
            return AuthenticityStatus.AUTHENTIC
        return AuthenticityStatus.FLAGGED

    def is_owned_by(self, identity: str) -> bool:
        """Custodian identities compare case-insensitively (hex wallet style)."""
        return self.current_owner.lower() == identity.strip().lower()


class CustodyEvent(BaseModel):
    """One recorded change of possession."""

    event_id: int | None = None
    product_id: int
    from_identity: str
    to_identity: str
    event_type: CustodyEventType
    location: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CounterfeitReport(BaseModel):
    """
    Immutable counterfeit flag.

    Product name, manufacturer and identifier are snapshotted at report
    time so the report stays meaningful on its own.
    """

    report_id: int | None = None
    product_id: int
    reason: str
    reporter_identity: str
    product_name: str
    manufacturer_name: str
    identifier: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class VerificationStatus(str, Enum):
    """Tri-state outcome of presenting an identifier."""

    AUTHENTIC = "authentic"
    FLAGGED = "flagged"
    UNREGISTERED = "unregistered"


class VerificationResult(BaseModel):
    """Result of verify(); product is None only when UNREGISTERED."""

    identifier: str
    status: VerificationStatus
    product: ProductRecord | None = None

    @classmethod
    def for_product(cls, identifier: str, product: ProductRecord | None) -> "VerificationResult":
        if product is None:
            return cls(identifier=identifier, status=VerificationStatus.UNREGISTERED)
        status = (
            VerificationStatus.AUTHENTIC
            if product.is_authentic
            else VerificationStatus.FLAGGED
        )
        return cls(identifier=identifier, status=status, product=product)

    @property
    def is_registered(self) -> bool:
        return self.status != VerificationStatus.UNREGISTERED


class TransferResult(BaseModel):
    """Successful transfer: updated record plus the appended event."""

    product: ProductRecord
    event: CustodyEvent
