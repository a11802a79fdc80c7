"""
Database schema bootstrap.

The schema in ``schema.sql`` is written with ``IF NOT EXISTS`` everywhere,
so applying it on every start is safe.
"""

from pathlib import Path

import aiosqlite

from airos.config import get_logger
from airos.core.exceptions import StoreUnavailableError
from airos.infrastructure.storage.sqlite.connection import get_connection
from airos.infrastructure.storage.sqlite.errors import store_operation

logger = get_logger(__name__)

SCHEMA_FILE = Path(__file__).parent / "schema.sql"

TABLES = (
    "users",
    "auth_sessions",
    "suppliers",
    "products",
    "stock_movements",
    "orders",
    "order_items",
    "order_sequences",
)


def load_schema() -> str:
    """Read the schema script shipped with the package."""
    return SCHEMA_FILE.read_text(encoding="utf-8")


async def initialize_database() -> None:
    """Apply the schema to the configured database."""
    script = load_schema()
    try:
        async with get_connection() as conn:
            await conn.executescript(script)
            await conn.commit()
    except aiosqlite.Error as e:
        logger.error("schema_apply_failed", error=str(e))
        raise StoreUnavailableError("initialize_database", str(e)) from e
    logger.info("schema_applied", tables=len(TABLES))


@store_operation("missing_tables")
async def missing_tables() -> list[str]:
    """Names of expected tables absent from the database."""
    async with get_connection() as conn:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        present = {row[0] for row in await cursor.fetchall()}
    return [name for name in TABLES if name not in present]
