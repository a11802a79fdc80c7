"""Application use cases."""

from airos.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from airos.application.use_cases.create_order import CreateOrderUseCase
from airos.application.use_cases.dashboard_stats import DashboardStatsUseCase
from airos.application.use_cases.delete_order import DeleteOrderUseCase
from airos.application.use_cases.manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)
from airos.application.use_cases.manage_suppliers import (
    AdjustSupplierBalanceUseCase,
    CreateSupplierUseCase,
    DeleteSupplierUseCase,
    UpdateSupplierUseCase,
)
from airos.application.use_cases.manage_users import (
    AuthenticateUserUseCase,
    AuthResult,
    CreateAdminUseCase,
    DeleteUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
    UpdateUserUseCase,
)
from airos.application.use_cases.transition_order_status import TransitionOrderStatusUseCase
from airos.application.use_cases.update_order import UpdateOrderUseCase

__all__ = [
    # Orders
    "CreateOrderUseCase",
    "TransitionOrderStatusUseCase",
    "UpdateOrderUseCase",
    "DeleteOrderUseCase",
    # Stock
    "AdjustStockUseCase",
    "AdjustStockResult",
    # Catalog
    "CreateProductUseCase",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
    # Suppliers
    "CreateSupplierUseCase",
    "UpdateSupplierUseCase",
    "DeleteSupplierUseCase",
    "AdjustSupplierBalanceUseCase",
    # Users
    "RegisterUserUseCase",
    "AuthenticateUserUseCase",
    "AuthResult",
    "CreateAdminUseCase",
    "UpdateProfileUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    # Reporting
    "DashboardStatsUseCase",
]
