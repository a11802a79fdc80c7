"""
Dependency injection container for FastAPI.

Provides stores, use cases and the authenticated principal to route handlers.
"""

from collections.abc import Awaitable, Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from airos.application.use_cases import (
    AdjustStockUseCase,
    AdjustSupplierBalanceUseCase,
    AuthenticateUserUseCase,
    CreateOrderUseCase,
    CreateProductUseCase,
    CreateSupplierUseCase,
    DashboardStatsUseCase,
    DeleteOrderUseCase,
    DeleteProductUseCase,
    DeleteSupplierUseCase,
    DeleteUserUseCase,
    RegisterUserUseCase,
    TransitionOrderStatusUseCase,
    UpdateOrderUseCase,
    UpdateProductUseCase,
    UpdateProfileUseCase,
    UpdateSupplierUseCase,
    UpdateUserUseCase,
)
from airos.core.entities.user import AuthPrincipal, UserRole
from airos.core.exceptions import InvalidTokenError, PermissionDeniedError
from airos.core.interfaces.auth import ITokenIssuer, ITokenVerifier
from airos.core.services import InventoryLedger
from airos.infrastructure.auth import get_token_service
from airos.infrastructure.storage.sqlite import (
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLiteSupplierStore,
    SQLiteUserStore,
    get_order_store,
    get_product_store,
    get_supplier_store,
    get_user_store,
)

bearer_scheme = HTTPBearer(auto_error=False)


# Store dependencies
async def get_prod_store() -> SQLiteProductStore:
    """Get product store."""
    return await get_product_store()


async def get_ord_store() -> SQLiteOrderStore:
    """Get order store."""
    return await get_order_store()


async def get_supp_store() -> SQLiteSupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_usr_store() -> SQLiteUserStore:
    """Get user store."""
    return await get_user_store()


async def get_inventory_ledger() -> InventoryLedger:
    """Get an inventory ledger over the product store."""
    return InventoryLedger(await get_product_store())


# Auth
async def get_token_verifier() -> ITokenVerifier:
    return await get_token_service()


async def get_token_issuer() -> ITokenIssuer:
    return await get_token_service()


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Raw bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Not authorized, no token")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    verifier: ITokenVerifier = Depends(get_token_verifier),
) -> AuthPrincipal:
    """Resolve the caller from the bearer token."""
    return await verifier.verify_token(token)


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[AuthPrincipal]]:
    """Dependency factory: the caller must hold one of `roles`."""

    async def checker(principal: AuthPrincipal = Depends(get_current_user)) -> AuthPrincipal:
        if principal.role not in roles:
            raise PermissionDeniedError(principal.role.value)
        return principal

    return checker


require_admin = require_roles(UserRole.ADMIN)
require_manager = require_roles(UserRole.ADMIN, UserRole.MANAGER)


# Use case dependencies
def get_create_order_use_case() -> CreateOrderUseCase:
    return CreateOrderUseCase()


def get_transition_order_status_use_case() -> TransitionOrderStatusUseCase:
    return TransitionOrderStatusUseCase()


def get_update_order_use_case() -> UpdateOrderUseCase:
    return UpdateOrderUseCase()


def get_delete_order_use_case() -> DeleteOrderUseCase:
    return DeleteOrderUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    return AdjustStockUseCase()


def get_create_product_use_case() -> CreateProductUseCase:
    return CreateProductUseCase()


def get_update_product_use_case() -> UpdateProductUseCase:
    return UpdateProductUseCase()


def get_delete_product_use_case() -> DeleteProductUseCase:
    return DeleteProductUseCase()


def get_create_supplier_use_case() -> CreateSupplierUseCase:
    return CreateSupplierUseCase()


def get_update_supplier_use_case() -> UpdateSupplierUseCase:
    return UpdateSupplierUseCase()


def get_delete_supplier_use_case() -> DeleteSupplierUseCase:
    return DeleteSupplierUseCase()


def get_adjust_supplier_balance_use_case() -> AdjustSupplierBalanceUseCase:
    return AdjustSupplierBalanceUseCase()


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase()


def get_authenticate_user_use_case() -> AuthenticateUserUseCase:
    return AuthenticateUserUseCase()


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase()


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase()


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase()


def get_dashboard_stats_use_case() -> DashboardStatsUseCase:
    return DashboardStatsUseCase()
