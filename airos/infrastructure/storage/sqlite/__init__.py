"""SQLite storage implementations."""

from airos.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from airos.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from airos.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from airos.infrastructure.storage.sqlite.schema import initialize_database, missing_tables
from airos.infrastructure.storage.sqlite.sequence_store import SQLiteSequenceStore
from airos.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from airos.infrastructure.storage.sqlite.user_store import SQLiteSessionStore, SQLiteUserStore

# Singleton instances
_product_store: SQLiteProductStore | None = None
_order_store: SQLiteOrderStore | None = None
_sequence_store: SQLiteSequenceStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_user_store: SQLiteUserStore | None = None
_session_store: SQLiteSessionStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_sequence_store() -> SQLiteSequenceStore:
    """Get singleton order sequence store instance."""
    global _sequence_store
    if _sequence_store is None:
        _sequence_store = SQLiteSequenceStore()
    return _sequence_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


async def get_session_store() -> SQLiteSessionStore:
    """Get singleton auth session store instance."""
    global _session_store
    if _session_store is None:
        _session_store = SQLiteSessionStore()
    return _session_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Schema
    "initialize_database",
    "missing_tables",
    # Store classes
    "SQLiteProductStore",
    "SQLiteOrderStore",
    "SQLiteSequenceStore",
    "SQLiteSupplierStore",
    "SQLiteUserStore",
    "SQLiteSessionStore",
    # Factory functions
    "get_product_store",
    "get_order_store",
    "get_sequence_store",
    "get_supplier_store",
    "get_user_store",
    "get_session_store",
]
