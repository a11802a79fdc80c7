"""Core domain entities."""

from airos.core.entities.order import (
    CustomerAddress,
    CustomerInfo,
    LineRequest,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from airos.core.entities.product import (
    MovementType,
    Product,
    ProductCategory,
    ProductUnit,
    StockMovement,
    StockOperation,
)
from airos.core.entities.supplier import (
    BalanceOperation,
    BusinessInfo,
    ContactPerson,
    PaymentTerms,
    Supplier,
    SupplierAddress,
)
from airos.core.entities.user import AuthPrincipal, AuthSession, User, UserRole

__all__ = [
    # Orders
    "CustomerAddress",
    "CustomerInfo",
    "LineRequest",
    "Order",
    "OrderLine",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    # Products
    "MovementType",
    "Product",
    "ProductCategory",
    "ProductUnit",
    "StockMovement",
    "StockOperation",
    # Suppliers
    "BalanceOperation",
    "BusinessInfo",
    "ContactPerson",
    "PaymentTerms",
    "Supplier",
    "SupplierAddress",
    # Users
    "AuthPrincipal",
    "AuthSession",
    "User",
    "UserRole",
]
