"""SQLite implementation of ledger storage."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.identity import CallerRole, CustodianBinding
from src.core.entities.product import (
    CounterfeitReport,
    CustodyEvent,
    CustodyEventType,
    ProductRecord,
)
from src.core.exceptions import DatabaseError, DuplicateIdentifierError
from src.core.interfaces.ledger_store import ILedgerStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _parse_timestamp(value: str | None) -> datetime:
    if value:
        try:
            parsed = datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.now(UTC)


@asynccontextmanager
async def _connection(operation: str) -> AsyncIterator[aiosqlite.Connection]:
    """Pooled connection whose driver errors surface as DatabaseError."""
    try:
        async with get_connection() as conn:
            yield conn
    except aiosqlite.Error as e:
        logger.error("sqlite_operation_failed", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e


@asynccontextmanager
async def _transaction(operation: str) -> AsyncIterator[aiosqlite.Connection]:
    """Pooled transaction whose driver errors surface as DatabaseError."""
    try:
        async with get_transaction() as conn:
            yield conn
    except aiosqlite.Error as e:
        logger.error("sqlite_operation_failed", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e


class SQLiteLedgerStore(ILedgerStore):
    """SQLite implementation of product, custody, report and binding storage."""

    # Product operations

    async def get_product(self, product_id: int) -> ProductRecord | None:
        async with _connection("get_product") as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE product_id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def get_product_by_identifier(self, identifier: str) -> ProductRecord | None:
        async with _connection("get_product_by_identifier") as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE identifier = ?", (identifier,)
            )
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def scan_products(self) -> list[ProductRecord]:
        async with _connection("scan_products") as conn:
            cursor = await conn.execute("SELECT * FROM products ORDER BY product_id")
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def next_product_id(self) -> int:
        async with _connection("next_product_id") as conn:
            cursor = await conn.execute(
                "SELECT COALESCE(MAX(product_id), 0) + 1 FROM products"
            )
            row = await cursor.fetchone()
            return int(row[0])

    async def insert_product(
        self, product: ProductRecord, event: CustodyEvent
    ) -> ProductRecord:
        """Insert product and its MANUFACTURED event in one transaction."""
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO products (
                        product_id, identifier, product_name, manufacturer_name,
                        manufacturer_identity, current_owner, is_authentic,
                        product_type, description, price, registered_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.product_id,
                        product.identifier,
                        product.product_name,
                        product.manufacturer_name,
                        product.manufacturer_identity,
                        product.current_owner,
                        int(product.is_authentic),
                        product.product_type,
                        product.description,
                        product.price,
                        product.registered_at.isoformat(),
                    ),
                )
                event.event_id = await self._insert_event(conn, event)
        except aiosqlite.IntegrityError as e:
            if "identifier" in str(e):
                raise DuplicateIdentifierError(product.identifier) from e
            raise DatabaseError("insert_product", str(e)) from e
        except aiosqlite.Error as e:
            raise DatabaseError("insert_product", str(e)) from e

        logger.debug(
            "product_row_inserted",
            product_id=product.product_id,
            identifier=product.identifier,
        )
        return product

    async def record_transfer(
        self, product: ProductRecord, event: CustodyEvent
    ) -> CustodyEvent:
        async with _transaction("record_transfer") as conn:
            await conn.execute(
                "UPDATE products SET current_owner = ? WHERE product_id = ?",
                (product.current_owner, product.product_id),
            )
            event.event_id = await self._insert_event(conn, event)
        return event

    async def record_report(
        self, product: ProductRecord, report: CounterfeitReport
    ) -> CounterfeitReport:
        async with _transaction("record_report") as conn:
            await conn.execute(
                "UPDATE products SET is_authentic = ? WHERE product_id = ?",
                (int(product.is_authentic), product.product_id),
            )
            report.report_id = await self._insert_report(conn, report)
        return report

    # Custody history

    async def get_history(self, product_id: int) -> list[CustodyEvent]:
        async with _connection("get_history") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM custody_events
                WHERE product_id = ?
                ORDER BY event_id ASC
                """,
                (product_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_event(row) for row in rows]

    # Report log

    async def append_report(self, report: CounterfeitReport) -> CounterfeitReport:
        async with _transaction("append_report") as conn:
            report.report_id = await self._insert_report(conn, report)
        return report

    async def scan_reports(self) -> list[CounterfeitReport]:
        async with _connection("scan_reports") as conn:
            cursor = await conn.execute(
                "SELECT * FROM counterfeit_reports ORDER BY report_id ASC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_report(row) for row in rows]

    async def count_reports(self) -> int:
        async with _connection("count_reports") as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM counterfeit_reports")
            row = await cursor.fetchone()
            return int(row[0])

    # Identity bindings

    async def put_binding(self, binding: CustodianBinding) -> CustodianBinding:
        async with _transaction("put_binding") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO custodian_bindings (caller_id, role, custodian, bound_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    binding.caller_id,
                    binding.role.value,
                    binding.custodian,
                    binding.bound_at.isoformat(),
                ),
            )
            binding.binding_id = cursor.lastrowid
        return binding

    async def get_bindings(self, caller_id: str) -> list[CustodianBinding]:
        async with _connection("get_bindings") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM custodian_bindings
                WHERE caller_id = ?
                ORDER BY binding_id ASC
                """,
                (caller_id,),
            )
            rows = await cursor.fetchall()
            return [
                CustodianBinding(
                    binding_id=row["binding_id"],
                    caller_id=row["caller_id"],
                    role=CallerRole(row["role"]),
                    custodian=row["custodian"],
                    bound_at=_parse_timestamp(row["bound_at"]),
                )
                for row in rows
            ]

    # Helpers

    @staticmethod
    async def _insert_event(conn: aiosqlite.Connection, event: CustodyEvent) -> int | None:
        cursor = await conn.execute(
            """
            INSERT INTO custody_events (
                product_id, from_identity, to_identity, event_type, location, timestamp
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                event.product_id,
                event.from_identity,
                event.to_identity,
                event.event_type.value,
                event.location,
                event.timestamp.isoformat(),
            ),
        )
        return cursor.lastrowid

    @staticmethod
    async def _insert_report(conn: aiosqlite.Connection, report: CounterfeitReport) -> int | None:
        cursor = await conn.execute(
            """
            INSERT INTO counterfeit_reports (
                product_id, reason, reporter_identity, product_name,
                manufacturer_name, identifier, timestamp
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                report.product_id,
                report.reason,
                report.reporter_identity,
                report.product_name,
                report.manufacturer_name,
                report.identifier,
                report.timestamp.isoformat(),
            ),
        )
        return cursor.lastrowid

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> ProductRecord:
        return ProductRecord(
            product_id=row["product_id"],
            identifier=row["identifier"],
            product_name=row["product_name"],
            manufacturer_name=row["manufacturer_name"],
            manufacturer_identity=row["manufacturer_identity"],
            current_owner=row["current_owner"],
            is_authentic=bool(row["is_authentic"]),
            product_type=row["product_type"],
            description=row["description"],
            price=row["price"],
            registered_at=_parse_timestamp(row["registered_at"]),
        )

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> CustodyEvent:
        return CustodyEvent(
            event_id=row["event_id"],
            product_id=row["product_id"],
            from_identity=row["from_identity"],
            to_identity=row["to_identity"],
            event_type=CustodyEventType(row["event_type"]),
            location=row["location"],
            timestamp=_parse_timestamp(row["timestamp"]),
        )

    @staticmethod
    def _row_to_report(row: aiosqlite.Row) -> CounterfeitReport:
        return CounterfeitReport(
            report_id=row["report_id"],
            product_id=row["product_id"],
            reason=row["reason"],
            reporter_identity=row["reporter_identity"],
            product_name=row["product_name"],
            manufacturer_name=row["manufacturer_name"],
            identifier=row["identifier"],
            timestamp=_parse_timestamp(row["timestamp"]),
        )
