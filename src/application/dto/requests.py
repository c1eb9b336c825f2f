"""Request DTOs for API endpoints.

Pydantic v2 models for request validation. Fields the ledger itself
validates (new owner, location, reason) are optional here so that a
missing value surfaces as the ledger's INVALID_INPUT error rather than a
generic schema error.
"""

from pydantic import BaseModel, Field


class RegisterProductRequest(BaseModel):
    """Register a product (manufacturer only)."""

    product_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Product name",
        examples=["Premium Smartphone"],
    )
    manufacturer_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Manufacturer display name",
        examples=["TechCorp"],
    )
    identifier: str | None = Field(
        default=None,
        description="Pre-issued identifier; generated when omitted",
        examples=["PRD-LZ3K9Q1A-7F2KD9XQ1"],
    )
    price: float | None = Field(default=None, ge=0, description="Unit price")
    product_type: str | None = Field(default=None, description="Product category")
    description: str | None = Field(default=None, description="Free-text description")


class TransferOwnershipRequest(BaseModel):
    """Hand custody of a product to a new owner."""

    new_owner: str | None = Field(
        default=None,
        description="Custodian identity receiving the product",
    )
    event_type: str = Field(
        default="DISTRIBUTED",
        description="DISTRIBUTED, SOLD or TRANSFERRED",
    )
    location: str | None = Field(
        default=None,
        description="Where the hand-over happened",
    )


class ReportCounterfeitRequest(BaseModel):
    """Flag a product as counterfeit."""

    reason: str | None = Field(
        default=None,
        max_length=2000,
        description="Why the product is believed counterfeit",
    )


class ScanVerifyRequest(BaseModel):
    """Decoded QR content from a scanner."""

    payload: str = Field(
        ...,
        min_length=1,
        description="Bare identifier or the JSON payload carried by the QR code",
    )


class BindIdentityRequest(BaseModel):
    """Bind the calling identity to an on-ledger custodian identity."""

    custodian: str = Field(
        ...,
        min_length=1,
        description="Custodian (wallet) identity used for ownership",
    )
