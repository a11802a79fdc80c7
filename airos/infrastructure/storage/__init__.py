"""Storage infrastructure implementations."""

from airos.infrastructure.storage.sqlite import (
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLiteSequenceStore,
    SQLiteSessionStore,
    SQLiteSupplierStore,
    SQLiteUserStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    initialize_database,
)

__all__ = [
    # SQLite stores
    "SQLiteProductStore",
    "SQLiteOrderStore",
    "SQLiteSequenceStore",
    "SQLiteSupplierStore",
    "SQLiteUserStore",
    "SQLiteSessionStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "initialize_database",
]
