"""Core interfaces (ports) for dependency injection."""

from airos.core.interfaces.auth import IPasswordHasher, ITokenIssuer, ITokenVerifier
from airos.core.interfaces.order_store import IOrderStore, ISequenceStore
from airos.core.interfaces.product_store import IProductStore
from airos.core.interfaces.supplier_store import ISupplierStore
from airos.core.interfaces.user_store import ISessionStore, IUserStore

__all__ = [
    # Storage interfaces
    "IProductStore",
    "IOrderStore",
    "ISequenceStore",
    "ISupplierStore",
    "IUserStore",
    "ISessionStore",
    # Auth interfaces
    "ITokenVerifier",
    "ITokenIssuer",
    "IPasswordHasher",
]
