"""SQLite implementation of supplier storage."""

import json

import aiosqlite

from airos.config import get_logger
from airos.core.entities.stats import RatingCount
from airos.core.entities.supplier import (
    BalanceOperation,
    BusinessInfo,
    ContactPerson,
    PaymentTerms,
    Supplier,
    SupplierAddress,
)
from airos.core.exceptions import DuplicateSupplierCodeError
from airos.core.interfaces.supplier_store import ISupplierStore
from airos.core.time_utils import parse_iso_datetime, utcnow
from airos.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from airos.infrastructure.storage.sqlite.errors import store_operation

logger = get_logger(__name__)


class SQLiteSupplierStore(ISupplierStore):
    """SQLite implementation of supplier storage."""

    @store_operation("create_supplier")
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a new supplier."""
        now = utcnow()
        supplier.created_at = now
        supplier.updated_at = now
        params = self._profile_params(supplier)
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO suppliers (
                        name, code, contact_person, address, business_info,
                        payment_terms, credit_limit, categories, rating,
                        is_active, notes, last_order_date, current_balance,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        *params,
                        supplier.current_balance,
                        supplier.created_at.isoformat(),
                        supplier.updated_at.isoformat(),
                    ),
                )
                supplier.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if "suppliers.code" in str(e):
                raise DuplicateSupplierCodeError(supplier.code) from e
            raise

        logger.info("supplier_created", supplier_id=supplier.id, code=supplier.code)
        return supplier

    @store_operation("get_supplier")
    async def get_supplier(self, supplier_id: int) -> Supplier | None:
        """Get supplier by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM suppliers WHERE id = ?", (supplier_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_supplier(row)

    @store_operation("get_supplier_by_code")
    async def get_supplier_by_code(self, code: str) -> Supplier | None:
        """Get supplier by code."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers WHERE code = ?", (code.strip().upper(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_supplier(row)

    @store_operation("update_supplier")
    async def update_supplier(self, supplier: Supplier) -> Supplier:
        """Update profile fields. The balance only moves through adjust_balance."""
        supplier.updated_at = utcnow()
        params = self._profile_params(supplier)
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE suppliers SET
                        name = ?, code = ?, contact_person = ?, address = ?,
                        business_info = ?, payment_terms = ?, credit_limit = ?,
                        categories = ?, rating = ?, is_active = ?, notes = ?,
                        last_order_date = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (*params, supplier.updated_at.isoformat(), supplier.id),
                )
        except aiosqlite.IntegrityError as e:
            if "suppliers.code" in str(e):
                raise DuplicateSupplierCodeError(supplier.code) from e
            raise

        logger.info("supplier_updated", supplier_id=supplier.id)
        return supplier

    @store_operation("delete_supplier")
    async def delete_supplier(self, supplier_id: int) -> bool:
        """Delete a supplier. Products keep existing with no supplier."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM suppliers WHERE id = ?", (supplier_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("supplier_deleted", supplier_id=supplier_id)
        return deleted

    @store_operation("list_suppliers")
    async def list_suppliers(
        self,
        search: str | None = None,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> list[Supplier]:
        """List suppliers ordered by name."""
        clauses: list[str] = []
        params: list = []
        if search:
            pattern = f"%{search.strip()}%"
            clauses.append("(name LIKE ? OR code LIKE ? OR contact_person LIKE ?)")
            params.extend([pattern, pattern, pattern])
        if category:
            # categories is a JSON array of strings
            clauses.append(
                "EXISTS (SELECT 1 FROM json_each(suppliers.categories) WHERE value = ?)"
            )
            params.append(category)
        if is_active is not None:
            clauses.append("is_active = ?")
            params.append(int(is_active))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM suppliers {where} ORDER BY name, id", params
            )
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    @store_operation("adjust_supplier_balance")
    async def adjust_balance(
        self, supplier_id: int, amount: float, operation: BalanceOperation
    ) -> Supplier | None:
        """Single-statement balance update; subtraction floors at zero."""
        if operation == BalanceOperation.ADD:
            expression = "current_balance + ?"
        else:
            expression = "MAX(0, current_balance - ?)"
        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"""
                UPDATE suppliers
                SET current_balance = {expression}, updated_at = ?
                WHERE id = ?
                """,
                (amount, utcnow().isoformat(), supplier_id),
            )
            if cursor.rowcount == 0:
                return None
            cursor = await conn.execute("SELECT * FROM suppliers WHERE id = ?", (supplier_id,))
            row = await cursor.fetchone()

        supplier = self._row_to_supplier(row)
        logger.info(
            "supplier_balance_adjusted",
            supplier_id=supplier_id,
            operation=operation.value,
            amount=amount,
            balance=supplier.current_balance,
        )
        return supplier

    @store_operation("count_suppliers")
    async def count_suppliers(self, is_active: bool | None = None) -> int:
        async with get_connection() as conn:
            if is_active is None:
                cursor = await conn.execute("SELECT COUNT(*) FROM suppliers")
            else:
                cursor = await conn.execute(
                    "SELECT COUNT(*) FROM suppliers WHERE is_active = ?", (int(is_active),)
                )
            row = await cursor.fetchone()
            return row[0] if row else 0

    @store_operation("supplier_credit_totals")
    async def credit_totals(self) -> tuple[float, float]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COALESCE(SUM(credit_limit), 0), COALESCE(SUM(current_balance), 0)
                FROM suppliers
                """
            )
            row = await cursor.fetchone()
            return float(row[0]), float(row[1])

    @store_operation("count_suppliers_by_rating")
    async def count_by_rating(self) -> list[RatingCount]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT rating, COUNT(*) AS count FROM suppliers
                GROUP BY rating
                ORDER BY rating
                """
            )
            rows = await cursor.fetchall()
            return [RatingCount(rating=row["rating"], count=row["count"]) for row in rows]

    @store_operation("top_suppliers_by_balance")
    async def top_by_balance(self, limit: int = 5) -> list[Supplier]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM suppliers
                ORDER BY current_balance DESC, id
                LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    @staticmethod
    def _profile_params(supplier: Supplier) -> tuple:
        """Profile column values, name through last_order_date."""
        return (
            supplier.name,
            supplier.code,
            supplier.contact_person.model_dump_json(),
            supplier.address.model_dump_json(),
            supplier.business_info.model_dump_json(),
            supplier.payment_terms.value,
            supplier.credit_limit,
            json.dumps([c.value for c in supplier.categories]),
            supplier.rating,
            int(supplier.is_active),
            supplier.notes,
            supplier.last_order_date.isoformat() if supplier.last_order_date else None,
        )

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        """Convert a database row to a Supplier entity."""
        return Supplier(
            id=row["id"],
            name=row["name"],
            code=row["code"],
            contact_person=ContactPerson(**json.loads(row["contact_person"])),
            address=SupplierAddress(**json.loads(row["address"])),
            business_info=BusinessInfo(**json.loads(row["business_info"] or "{}")),
            payment_terms=PaymentTerms(row["payment_terms"]),
            credit_limit=float(row["credit_limit"]),
            current_balance=float(row["current_balance"]),
            categories=json.loads(row["categories"] or "[]"),
            rating=int(row["rating"]),
            is_active=bool(row["is_active"]),
            notes=row["notes"],
            last_order_date=parse_iso_datetime(row["last_order_date"]),
            created_at=parse_iso_datetime(row["created_at"]) or utcnow(),
            updated_at=parse_iso_datetime(row["updated_at"]) or utcnow(),
        )
