"""Fixed demo records used for conformance checks and the consumer demo."""

from __future__ import annotations

from src.config import get_logger
from src.core.entities.product import ProductRecord
from src.core.services.identifier_generator import (
    DEMO_AUTHENTIC_IDENTIFIER,
    DEMO_COUNTERFEIT_IDENTIFIER,
)
from src.core.services.product_ledger import ProductLedger

logger = get_logger(__name__)

DEMO_MANUFACTURER_IDENTITY = "0x1234567890123456789012345678901234567890"
DEMO_REGULATOR_IDENTITY = "0x4567890123456789012345678901234567890123"
DEMO_COUNTERFEIT_REASON = "Duplicate QR code detected at multiple retailers"


async def seed_demo_products(ledger: ProductLedger) -> list[ProductRecord]:
    """
    Register PRD-DEMO-AUTHENTIC and a flagged PRD-DEMO-COUNTERFEIT.

    Identifiers that already resolve are left untouched.
    """
    seeded: list[ProductRecord] = []

    authentic = await ledger.verify(DEMO_AUTHENTIC_IDENTIFIER)
    if not authentic.is_registered:
        product = await ledger.register(
            manufacturer_identity=DEMO_MANUFACTURER_IDENTITY,
            product_name="Premium Smartphone",
            manufacturer_name="TechCorp Manufacturing",
            identifier=DEMO_AUTHENTIC_IDENTIFIER,
            price=799.0,
            product_type="Electronics",
            description="Demo record that always verifies as authentic",
        )
        seeded.append(product)

    counterfeit = await ledger.verify(DEMO_COUNTERFEIT_IDENTIFIER)
    if not counterfeit.is_registered:
        product = await ledger.register(
            manufacturer_identity=DEMO_MANUFACTURER_IDENTITY,
            product_name="Designer Handbag",
            manufacturer_name="LuxBrand",
            identifier=DEMO_COUNTERFEIT_IDENTIFIER,
            price=1200.0,
            product_type="Fashion",
            description="Demo record that always verifies as flagged",
        )
        await ledger.report_counterfeit(
            product.product_id,
            reporter_identity=DEMO_REGULATOR_IDENTITY,
            reason=DEMO_COUNTERFEIT_REASON,
        )
        seeded.append(product)

    logger.info("demo_products_seeded", count=len(seeded))
    return seeded
