"""
Product Ledger.

The authoritative chain-of-custody store: registration, verification,
ownership transfer and counterfeit reporting.

Concurrency discipline (single process, asyncio):
- registration holds one ledger-wide lock around the identifier check,
  product ID allocation and insert;
- transfer and report hold a per-product lock around their
  read-check-write sequence, so at most one of two racing transfers sees
  the pre-transfer owner;
- reads take no lock. Stores hand out copies, so a reader never sees a
  half-applied record.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

from src.config import get_logger
from src.core.entities.ledger import ChangeKind
from src.core.entities.product import (
    MANUFACTURING_LOCATION,
    NULL_IDENTITY,
    TRANSFER_EVENT_TYPES,
    CounterfeitReport,
    CustodyEvent,
    CustodyEventType,
    ProductRecord,
    TransferResult,
    VerificationResult,
)
from src.core.exceptions import (
    DuplicateIdentifierError,
    InvalidInputError,
    NotOwnerError,
    ProductFlaggedError,
    ProductNotFoundError,
)
from src.core.interfaces.ledger_store import ILedgerStore
from src.core.services.identifier_generator import IdentifierGenerator
from src.core.services.ledger_events import LedgerChangeFeed
from src.core.services.report_log import ReportLog

logger = get_logger(__name__)


def _clean(value: str | None) -> str | None:
    """Strip optional text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require(field: str, value: str | None) -> str:
    cleaned = _clean(value)
    if cleaned is None:
        raise InvalidInputError(field, "is required")
    return cleaned


def _coerce_transfer_event(event_type: CustodyEventType | str) -> CustodyEventType:
    try:
        coerced = CustodyEventType(str(getattr(event_type, "value", event_type)).strip().upper())
    except ValueError:
        raise InvalidInputError("event_type", f"unknown event type '{event_type}'") from None
    if coerced not in TRANSFER_EVENT_TYPES:
        raise InvalidInputError(
            "event_type",
            f"{coerced.value} is not a transfer event; use DISTRIBUTED, SOLD or TRANSFERRED",
        )
    return coerced


class ProductLedger:
    """Single-writer authoritative ledger over an injected store."""

    def __init__(
        self,
        store: ILedgerStore,
        generator: IdentifierGenerator | None = None,
        change_feed: LedgerChangeFeed | None = None,
        report_log: ReportLog | None = None,
        max_register_retries: int = 5,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_register_retries < 1:
            raise ValueError(
                f"max_register_retries must be at least 1, got {max_register_retries}"
            )
        self._store = store
        self._generator = generator or IdentifierGenerator()
        self._change_feed = change_feed or LedgerChangeFeed()
        self._report_log = report_log or ReportLog(store)
        self._max_register_retries = max_register_retries
        self._clock = clock or (lambda: datetime.now(UTC))

        self._registration_lock = asyncio.Lock()
        self._product_locks: dict[int, asyncio.Lock] = {}

    @property
    def store(self) -> ILedgerStore:
        return self._store

    @property
    def generator(self) -> IdentifierGenerator:
        return self._generator

    @property
    def change_feed(self) -> LedgerChangeFeed:
        return self._change_feed

    @property
    def report_log(self) -> ReportLog:
        return self._report_log

    async def _lock_for(self, product_id: int) -> asyncio.Lock:
        """
        Per-product lock, created only once the product is known to exist.

        Products are never deleted, so a lock handed out here never goes stale.
        """
        lock = self._product_locks.get(product_id)
        if lock is None:
            if await self._store.get_product(product_id) is None:
                raise ProductNotFoundError(product_id)
            lock = self._product_locks.setdefault(product_id, asyncio.Lock())
        return lock

    @property
    def locked_product_count(self) -> int:
        """Number of per-product locks held in memory."""
        return len(self._product_locks)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register(
        self,
        manufacturer_identity: str,
        product_name: str,
        manufacturer_name: str,
        identifier: str,
        price: float | None = None,
        product_type: str | None = None,
        description: str | None = None,
    ) -> ProductRecord:
        """
        Register a product under a caller-supplied identifier.

        Raises:
            InvalidInputError: malformed registration
            DuplicateIdentifierError: identifier already issued (hard failure
                for caller-supplied identifiers)
        """
        manufacturer_identity = _require("manufacturer_identity", manufacturer_identity)
        product_name = _require("product_name", product_name)
        manufacturer_name = _require("manufacturer_name", manufacturer_name)
        identifier = self._generator.normalize(_require("identifier", identifier))
        if not self._generator.is_valid(identifier):
            raise InvalidInputError(
                "identifier", f"'{identifier}' does not match PRD-<timestamp>-<suffix>"
            )
        if price is not None and price < 0:
            raise InvalidInputError("price", "must not be negative")

        async with self._registration_lock:
            existing = await self._store.get_product_by_identifier(identifier)
            if existing is not None:
                raise DuplicateIdentifierError(identifier, existing.product_id)

            product_id = await self._store.next_product_id()
            now = self._clock()
            product = ProductRecord(
                product_id=product_id,
                identifier=identifier,
                product_name=product_name,
                manufacturer_name=manufacturer_name,
                manufacturer_identity=manufacturer_identity,
                current_owner=manufacturer_identity,
                is_authentic=True,
                product_type=_clean(product_type),
                description=_clean(description),
                price=price,
                registered_at=now,
            )
            event = CustodyEvent(
                product_id=product_id,
                from_identity=NULL_IDENTITY,
                to_identity=manufacturer_identity,
                event_type=CustodyEventType.MANUFACTURED,
                location=MANUFACTURING_LOCATION,
                timestamp=now,
            )
            product = await self._store.insert_product(product, event)

        logger.info(
            "product_registered",
            product_id=product.product_id,
            identifier=product.identifier,
            manufacturer=product.manufacturer_identity,
        )
        self._change_feed.publish(ChangeKind.REGISTERED, product.product_id, product.identifier)
        return product

    async def register_generated(
        self,
        manufacturer_identity: str,
        product_name: str,
        manufacturer_name: str,
        price: float | None = None,
        product_type: str | None = None,
        description: str | None = None,
    ) -> ProductRecord:
        """
        Register under a freshly generated identifier.

        A collision on a generated identifier is retried with a new one.
        """
        attempt = 1
        while True:
            identifier = self._generator.generate()
            try:
                return await self.register(
                    manufacturer_identity=manufacturer_identity,
                    product_name=product_name,
                    manufacturer_name=manufacturer_name,
                    identifier=identifier,
                    price=price,
                    product_type=product_type,
                    description=description,
                )
            except DuplicateIdentifierError:
                logger.warning(
                    "generated_identifier_collision",
                    identifier=identifier,
                    attempt=attempt,
                )
                if attempt >= self._max_register_retries:
                    raise
                attempt += 1

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def verify(self, identifier: str) -> VerificationResult:
        """
        Resolve an identifier to AUTHENTIC, FLAGGED or UNREGISTERED.

        UNREGISTERED is a normal outcome: it is the counterfeit signal for
        fabricated identifiers.
        """
        normalized = self._generator.normalize(identifier or "")
        product = None
        if normalized:
            product = await self._store.get_product_by_identifier(normalized)

        result = VerificationResult.for_product(normalized, product)
        logger.info("product_verified", identifier=normalized, status=result.status.value)
        return result

    async def get_product(self, product_id: int) -> ProductRecord | None:
        return await self._store.get_product(product_id)

    async def get_history(self, product_id: int) -> list[CustodyEvent]:
        """Custody events oldest first; empty for unknown products."""
        return await self._store.get_history(product_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def transfer_ownership(
        self,
        product_id: int,
        caller_identity: str,
        new_owner: str,
        event_type: CustodyEventType | str,
        location: str,
    ) -> TransferResult:
        """
        Hand custody from the current owner to new_owner.

        Raises:
            InvalidInputError: missing new owner/location or bad event type
            ProductNotFoundError: unknown product
            NotOwnerError: caller is not the current owner
            ProductFlaggedError: product reported as counterfeit
        """
        caller_identity = _require("caller_identity", caller_identity)
        new_owner = _require("new_owner", new_owner)
        location = _require("location", location)
        coerced_type = _coerce_transfer_event(event_type)

        async with await self._lock_for(product_id):
            product = await self._store.get_product(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            if not product.is_owned_by(caller_identity):
                logger.warning(
                    "transfer_rejected",
                    product_id=product_id,
                    reason="not_owner",
                    caller=caller_identity,
                )
                raise NotOwnerError(product_id, caller_identity)

            if not product.is_authentic:
                logger.warning(
                    "transfer_rejected",
                    product_id=product_id,
                    reason="flagged",
                    caller=caller_identity,
                )
                raise ProductFlaggedError(product_id)

            history = await self._store.get_history(product_id)
            timestamp = self._clock()
            if history and history[-1].timestamp > timestamp:
                # History stays ordered even if the wall clock steps back
                timestamp = history[-1].timestamp

            updated = product.model_copy(update={"current_owner": new_owner})
            event = CustodyEvent(
                product_id=product_id,
                from_identity=caller_identity,
                to_identity=new_owner,
                event_type=coerced_type,
                location=location,
                timestamp=timestamp,
            )
            event = await self._store.record_transfer(updated, event)

        logger.info(
            "ownership_transferred",
            product_id=product_id,
            from_identity=caller_identity,
            to_identity=new_owner,
            event_type=coerced_type.value,
        )
        self._change_feed.publish(ChangeKind.TRANSFERRED, product_id, updated.identifier)
        return TransferResult(product=updated, event=event)

    async def report_counterfeit(
        self,
        product_id: int,
        reporter_identity: str,
        reason: str,
    ) -> CounterfeitReport:
        """
        Flag a product as counterfeit and append a report.

        Any identity may report. Reporting an already flagged product
        appends another report; the flag itself never reverts.
        """
        reporter_identity = _require("reporter_identity", reporter_identity)
        reason = _require("reason", reason)

        async with await self._lock_for(product_id):
            product = await self._store.get_product(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            already_flagged = not product.is_authentic
            flagged = product.model_copy(update={"is_authentic": False})
            report = CounterfeitReport(
                product_id=product_id,
                reason=reason,
                reporter_identity=reporter_identity,
                product_name=product.product_name,
                manufacturer_name=product.manufacturer_name,
                identifier=product.identifier,
                timestamp=self._clock(),
            )
            report = await self._report_log.append(report, flagged_product=flagged)

        logger.info(
            "counterfeit_reported",
            product_id=product_id,
            report_id=report.report_id,
            reporter=reporter_identity,
            already_flagged=already_flagged,
        )
        self._change_feed.publish(ChangeKind.REPORTED, product_id, product.identifier)
        return report
