"""SQLite implementation of product and stock storage."""

import json

import aiosqlite

from airos.config import get_logger
from airos.core.entities.product import (
    MovementType,
    Product,
    ProductCategory,
    ProductUnit,
    StockMovement,
)
from airos.core.entities.stats import CategoryCount
from airos.core.exceptions import DuplicateSkuError, SupplierNotFoundError
from airos.core.interfaces.product_store import IProductStore
from airos.core.time_utils import parse_iso_datetime, utcnow
from airos.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from airos.infrastructure.storage.sqlite.errors import store_operation

logger = get_logger(__name__)

_LOW_STOCK = "stock_quantity <= min_stock_level"
OPENING_STOCK = "opening stock"


def _product_filters(
    category: str | None = None, search: str | None = None, low_stock: bool = False
) -> tuple[str, list]:
    clauses: list[str] = []
    params: list = []
    if category:
        clauses.append("category = ?")
        params.append(category)
    if search:
        pattern = f"%{search.strip()}%"
        clauses.append("(name LIKE ? OR sku LIKE ? OR description LIKE ?)")
        params.extend([pattern, pattern, pattern])
    if low_stock:
        clauses.append(_LOW_STOCK)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage and the stock ledger table."""

    @store_operation("create_product")
    async def create_product(self, product: Product) -> Product:
        """Create a new product. Opening stock is recorded as an `add` movement."""
        now = utcnow()
        product.created_at = now
        product.updated_at = now
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        name, description, sku, category, price, cost,
                        stock_quantity, min_stock_level, supplier_id, unit,
                        is_active, image, tags, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.name,
                        product.description,
                        product.sku,
                        product.category.value,
                        product.price,
                        product.cost,
                        product.stock_quantity,
                        product.min_stock_level,
                        product.supplier_id,
                        product.unit.value,
                        int(product.is_active),
                        product.image,
                        json.dumps(product.tags),
                        product.created_at.isoformat(),
                        product.updated_at.isoformat(),
                    ),
                )
                product.id = cursor.lastrowid
                if product.stock_quantity > 0:
                    await self._record_balance(
                        conn, product.id, product.stock_quantity, MovementType.ADD, OPENING_STOCK
                    )
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, product) from e

        logger.info("product_created", product_id=product.id, sku=product.sku)
        return product

    @store_operation("get_product")
    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    @store_operation("get_product_by_sku")
    async def get_product_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE sku = ?", (sku.strip().upper(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    @store_operation("update_product")
    async def update_product(self, product: Product) -> Product:
        """Update catalog fields. Stock only moves through the ledger."""
        product.updated_at = utcnow()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE products SET
                        name = ?, description = ?, sku = ?, category = ?,
                        price = ?, cost = ?, min_stock_level = ?,
                        supplier_id = ?, unit = ?, is_active = ?, image = ?,
                        tags = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        product.name,
                        product.description,
                        product.sku,
                        product.category.value,
                        product.price,
                        product.cost,
                        product.min_stock_level,
                        product.supplier_id,
                        product.unit.value,
                        int(product.is_active),
                        product.image,
                        json.dumps(product.tags),
                        product.updated_at.isoformat(),
                        product.id,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, product) from e

        logger.info("product_updated", product_id=product.id)
        return product

    @store_operation("delete_product")
    async def delete_product(self, product_id: int) -> bool:
        """Delete a product and its movement history."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted

    @store_operation("list_products")
    async def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        low_stock: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List products, newest first."""
        where, params = _product_filters(category, search, low_stock)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM products {where}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    @store_operation("count_products")
    async def count_products(
        self,
        low_stock: bool = False,
        category: str | None = None,
        search: str | None = None,
    ) -> int:
        """Count products matching the list filters."""
        where, params = _product_filters(category, search, low_stock)
        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM products {where}", params)
            row = await cursor.fetchone()
            return row[0] if row else 0

    @store_operation("category_distribution")
    async def category_distribution(self) -> list[CategoryCount]:
        """Product count per category, largest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT category, COUNT(*) AS value FROM products
                GROUP BY category
                ORDER BY value DESC, category
                """
            )
            rows = await cursor.fetchall()
            return [CategoryCount(name=row["category"], value=row["value"]) for row in rows]

    @store_operation("decrement_stock")
    async def decrement_stock(
        self,
        product_id: int,
        quantity: int,
        movement_type: MovementType,
        reference: str | None = None,
    ) -> int | None:
        """Conditional decrement; the WHERE clause is the stock check."""
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                """
                UPDATE products
                SET stock_quantity = stock_quantity - ?, updated_at = ?
                WHERE id = ? AND stock_quantity >= ?
                """,
                (quantity, utcnow().isoformat(), product_id, quantity),
            )
            if cursor.rowcount == 0:
                return None
            return await self._record_balance(
                conn, product_id, quantity, movement_type, reference
            )

    @store_operation("increment_stock")
    async def increment_stock(
        self,
        product_id: int,
        quantity: int,
        movement_type: MovementType,
        reference: str | None = None,
    ) -> int | None:
        """Add units back to stock."""
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                """
                UPDATE products
                SET stock_quantity = stock_quantity + ?, updated_at = ?
                WHERE id = ?
                """,
                (quantity, utcnow().isoformat(), product_id),
            )
            if cursor.rowcount == 0:
                return None
            return await self._record_balance(
                conn, product_id, quantity, movement_type, reference
            )

    @store_operation("add_movement")
    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Record a stock movement."""
        async with get_transaction() as conn:
            movement.id = await self._insert_movement(conn, movement)
        logger.debug(
            "stock_movement_recorded",
            movement_id=movement.id,
            type=movement.movement_type.value,
            qty=movement.quantity,
        )
        return movement

    @store_operation("get_movements")
    async def get_movements(self, product_id: int, limit: int = 100) -> list[StockMovement]:
        """Get movements for a product, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE product_id = ?
                ORDER BY id DESC
                LIMIT ?
                """,
                (product_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def _record_balance(
        self,
        conn: aiosqlite.Connection,
        product_id: int,
        quantity: int,
        movement_type: MovementType,
        reference: str | None,
    ) -> int:
        cursor = await conn.execute(
            "SELECT stock_quantity FROM products WHERE id = ?", (product_id,)
        )
        row = await cursor.fetchone()
        balance = int(row[0])
        await self._insert_movement(
            conn,
            StockMovement(
                product_id=product_id,
                movement_type=movement_type,
                quantity=quantity,
                balance_after=balance,
                reference=reference,
            ),
        )
        return balance

    @staticmethod
    async def _insert_movement(conn: aiosqlite.Connection, movement: StockMovement) -> int:
        cursor = await conn.execute(
            """
            INSERT INTO stock_movements (
                product_id, movement_type, quantity, balance_after,
                reference, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                movement.product_id,
                movement.movement_type.value,
                movement.quantity,
                movement.balance_after,
                movement.reference,
                movement.created_at.isoformat(),
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    @staticmethod
    def _integrity_error(error: aiosqlite.IntegrityError, product: Product) -> Exception:
        message = str(error)
        if "products.sku" in message:
            return DuplicateSkuError(product.sku)
        if "FOREIGN KEY" in message:
            return SupplierNotFoundError(product.supplier_id or 0)
        return error

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            sku=row["sku"],
            category=ProductCategory(row["category"]),
            price=float(row["price"]),
            cost=float(row["cost"]),
            stock_quantity=int(row["stock_quantity"]),
            min_stock_level=int(row["min_stock_level"]),
            supplier_id=row["supplier_id"],
            unit=ProductUnit(row["unit"]),
            is_active=bool(row["is_active"]),
            image=row["image"],
            tags=json.loads(row["tags"] or "[]"),
            created_at=parse_iso_datetime(row["created_at"]) or utcnow(),
            updated_at=parse_iso_datetime(row["updated_at"]) or utcnow(),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        """Convert a database row to a StockMovement entity."""
        return StockMovement(
            id=row["id"],
            product_id=row["product_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=int(row["quantity"]),
            balance_after=int(row["balance_after"]),
            reference=row["reference"],
            created_at=parse_iso_datetime(row["created_at"]) or utcnow(),
        )
