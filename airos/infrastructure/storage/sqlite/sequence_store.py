"""SQLite per-day order number counter."""

from datetime import date

from airos.config import get_logger
from airos.core.interfaces.order_store import ISequenceStore
from airos.core.time_utils import day_bounds
from airos.infrastructure.storage.sqlite.connection import get_transaction
from airos.infrastructure.storage.sqlite.errors import store_operation

logger = get_logger(__name__)


class SQLiteSequenceStore(ISequenceStore):
    """
    Counter rows in ``order_sequences``, one per calendar day.

    The upsert and the read-back run under one write lock, so two callers
    can never observe the same value.
    """

    @store_operation("next_order_sequence")
    async def next_value(self, day: date) -> int:
        start, end = day_bounds(day)
        key = day.isoformat()
        async with get_transaction(immediate=True) as conn:
            # A day's first row continues after orders already stored for it.
            await conn.execute(
                """
                INSERT INTO order_sequences (day, last_value)
                SELECT ?, COUNT(*) + 1 FROM orders
                WHERE created_at >= ? AND created_at < ?
                ON CONFLICT(day) DO UPDATE SET last_value = last_value + 1
                """,
                (key, start.isoformat(), end.isoformat()),
            )
            cursor = await conn.execute(
                "SELECT last_value FROM order_sequences WHERE day = ?", (key,)
            )
            row = await cursor.fetchone()
        value = int(row[0])
        logger.debug("order_sequence_advanced", day=key, value=value)
        return value
