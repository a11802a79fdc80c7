"""SQLite implementation of order storage."""

import json
from datetime import datetime

import aiosqlite

from airos.config import get_logger
from airos.core.entities.order import (
    CustomerAddress,
    CustomerInfo,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from airos.core.entities.stats import DailyTotals, StatusCount
from airos.core.exceptions import ConflictError, DuplicateOrderNumberError
from airos.core.interfaces.order_store import IOrderStore
from airos.core.time_utils import parse_iso_datetime, utcnow
from airos.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from airos.infrastructure.storage.sqlite.errors import store_operation

logger = get_logger(__name__)


def _filters(
    statuses: list[OrderStatus] | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    search: str | None = None,
) -> tuple[str, list]:
    """Build a WHERE clause over status, search text and the [start, end) creation window."""
    clauses: list[str] = []
    params: list = []
    if search:
        pattern = f"%{search.strip()}%"
        clauses.append("(order_number LIKE ? OR customer_name LIKE ? OR customer_email LIKE ?)")
        params.extend([pattern, pattern, pattern])
    if statuses:
        clauses.append(f"status IN ({', '.join('?' for _ in statuses)})")
        params.extend(s.value for s in statuses)
    if start is not None:
        clauses.append("created_at >= ?")
        params.append(start.isoformat())
    if end is not None:
        clauses.append("created_at < ?")
        params.append(end.isoformat())
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of orders and their line items."""

    @store_operation("create_order")
    async def create_order(self, order: Order) -> Order:
        """Insert an order and its items in one transaction. Keeps `created_at`."""
        order.updated_at = order.created_at
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO orders (
                        order_number, customer_name, customer_email,
                        customer_phone, customer_address, subtotal, tax,
                        shipping, total, status, payment_status,
                        payment_method, notes, created_by, shipped_at,
                        delivered_at, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.order_number,
                        order.customer.name,
                        order.customer.email,
                        order.customer.phone,
                        order.customer.address.model_dump_json(),
                        order.subtotal,
                        order.tax,
                        order.shipping,
                        order.total,
                        order.status.value,
                        order.payment_status.value,
                        order.payment_method.value,
                        order.notes,
                        order.created_by,
                        _iso(order.shipped_at),
                        _iso(order.delivered_at),
                        order.created_at.isoformat(),
                        order.updated_at.isoformat(),
                    ),
                )
                order.id = cursor.lastrowid
                await self._insert_items(conn, order)
        except aiosqlite.IntegrityError as e:
            if "orders.order_number" in str(e):
                raise DuplicateOrderNumberError(order.order_number or "") from e
            raise

        logger.info(
            "order_created",
            order_id=order.id,
            order_number=order.order_number,
            lines=len(order.items),
            total=order.total,
        )
        return order

    @store_operation("get_order")
    async def get_order(self, order_id: int) -> Order | None:
        """Get order by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, [order_id])
            return self._row_to_order(row, items.get(order_id, []))

    @store_operation("update_order")
    async def update_order(
        self, order: Order, expected_status: OrderStatus | None = None
    ) -> Order:
        """Persist every field and replace the item rows."""
        order.recalculate()
        order.updated_at = utcnow()
        guard = ""
        guard_params: tuple = ()
        if expected_status is not None:
            guard = " AND status = ?"
            guard_params = (expected_status.value,)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"""
                UPDATE orders SET
                    customer_name = ?, customer_email = ?, customer_phone = ?,
                    customer_address = ?, subtotal = ?, tax = ?, shipping = ?,
                    total = ?, status = ?, payment_status = ?,
                    payment_method = ?, notes = ?, shipped_at = ?,
                    delivered_at = ?, updated_at = ?
                WHERE id = ?{guard}
                """,
                (
                    order.customer.name,
                    order.customer.email,
                    order.customer.phone,
                    order.customer.address.model_dump_json(),
                    order.subtotal,
                    order.tax,
                    order.shipping,
                    order.total,
                    order.status.value,
                    order.payment_status.value,
                    order.payment_method.value,
                    order.notes,
                    _iso(order.shipped_at),
                    _iso(order.delivered_at),
                    order.updated_at.isoformat(),
                    order.id,
                    *guard_params,
                ),
            )
            if cursor.rowcount == 0:
                raise ConflictError(
                    "status",
                    expected_status.value if expected_status else None,
                    message=f"Order {order.id} changed concurrently",
                )
            await conn.execute("DELETE FROM order_items WHERE order_id = ?", (order.id,))
            await self._insert_items(conn, order)

        logger.info("order_updated", order_id=order.id, status=order.status.value)
        return order

    @store_operation("delete_order")
    async def delete_order(
        self, order_id: int, expected_status: OrderStatus | None = None
    ) -> bool:
        """Delete an order; items go with it. Same status guard as `update_order`."""
        guard, guard_params = "", ()
        if expected_status is not None:
            guard, guard_params = " AND status = ?", (expected_status.value,)
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                f"DELETE FROM orders WHERE id = ?{guard}", (order_id, *guard_params)
            )
            deleted = cursor.rowcount > 0
            if not deleted and expected_status is not None:
                cursor = await conn.execute("SELECT 1 FROM orders WHERE id = ?", (order_id,))
                if await cursor.fetchone() is not None:
                    raise ConflictError(
                        "status",
                        expected_status.value,
                        message=f"Order {order_id} changed concurrently",
                    )
        if deleted:
            logger.info("order_deleted", order_id=order_id)
        return deleted

    @store_operation("list_orders")
    async def list_orders(
        self,
        status: OrderStatus | None = None,
        search: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first."""
        where, params = _filters([status] if status else None, start, end, search)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM orders {where}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            items = await self._load_items(conn, [row["id"] for row in rows])
            return [self._row_to_order(row, items.get(row["id"], [])) for row in rows]

    @store_operation("count_orders")
    async def count_orders(
        self,
        statuses: list[OrderStatus] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        search: str | None = None,
    ) -> int:
        where, params = _filters(statuses, start, end, search)
        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM orders {where}", params)
            row = await cursor.fetchone()
            return row[0] if row else 0

    @store_operation("sum_revenue")
    async def sum_revenue(
        self,
        statuses: list[OrderStatus] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> float:
        where, params = _filters(statuses, start, end)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT COALESCE(SUM(total), 0) FROM orders {where}", params
            )
            row = await cursor.fetchone()
            return float(row[0]) if row else 0.0

    @store_operation("count_orders_by_status")
    async def count_by_status(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[StatusCount]:
        where, params = _filters(None, start, end)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT status, COUNT(*) AS count FROM orders {where}
                GROUP BY status
                ORDER BY count DESC, status
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [StatusCount(status=row["status"], count=row["count"]) for row in rows]

    @store_operation("daily_order_totals")
    async def daily_totals(
        self,
        statuses: list[OrderStatus] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[DailyTotals]:
        where, params = _filters(statuses, start, end)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT substr(created_at, 1, 10) AS day,
                       COUNT(*) AS count,
                       COALESCE(SUM(total), 0) AS revenue
                FROM orders {where}
                GROUP BY day
                ORDER BY day
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [
                DailyTotals(day=row["day"], count=row["count"], revenue=float(row["revenue"]))
                for row in rows
            ]

    @store_operation("count_distinct_customers")
    async def count_distinct_customers(self) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(DISTINCT customer_email) FROM orders")
            row = await cursor.fetchone()
            return row[0] if row else 0

    @staticmethod
    async def _insert_items(conn: aiosqlite.Connection, order: Order) -> None:
        await conn.executemany(
            """
            INSERT INTO order_items (
                order_id, line_no, product_id, product_name, sku,
                quantity, price, total
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    order.id,
                    line_no,
                    line.product_id,
                    line.product_name,
                    line.sku,
                    line.quantity,
                    line.price,
                    line.total,
                )
                for line_no, line in enumerate(order.items, start=1)
            ],
        )

    @staticmethod
    async def _load_items(
        conn: aiosqlite.Connection, order_ids: list[int]
    ) -> dict[int, list[OrderLine]]:
        if not order_ids:
            return {}
        placeholders = ", ".join("?" for _ in order_ids)
        cursor = await conn.execute(
            f"""
            SELECT * FROM order_items
            WHERE order_id IN ({placeholders})
            ORDER BY order_id, line_no
            """,
            order_ids,
        )
        items: dict[int, list[OrderLine]] = {}
        for row in await cursor.fetchall():
            items.setdefault(row["order_id"], []).append(
                OrderLine(
                    product_id=row["product_id"],
                    product_name=row["product_name"],
                    sku=row["sku"],
                    quantity=int(row["quantity"]),
                    price=float(row["price"]),
                )
            )
        return items

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, items: list[OrderLine]) -> Order:
        """Convert a database row and its items to an Order entity."""
        return Order(
            id=row["id"],
            order_number=row["order_number"],
            customer=CustomerInfo(
                name=row["customer_name"],
                email=row["customer_email"],
                phone=row["customer_phone"],
                address=CustomerAddress(**json.loads(row["customer_address"] or "{}")),
            ),
            items=items,
            tax=float(row["tax"]),
            shipping=float(row["shipping"]),
            status=OrderStatus(row["status"]),
            payment_status=PaymentStatus(row["payment_status"]),
            payment_method=PaymentMethod(row["payment_method"]),
            notes=row["notes"],
            created_by=row["created_by"],
            shipped_at=parse_iso_datetime(row["shipped_at"]),
            delivered_at=parse_iso_datetime(row["delivered_at"]),
            created_at=parse_iso_datetime(row["created_at"]) or utcnow(),
            updated_at=parse_iso_datetime(row["updated_at"]) or utcnow(),
        )
