"""API route modules."""

from airos.api.routes.auth import router as auth_router
from airos.api.routes.dashboard import router as dashboard_router
from airos.api.routes.health import router as health_router
from airos.api.routes.orders import router as orders_router
from airos.api.routes.products import router as products_router
from airos.api.routes.suppliers import router as suppliers_router
from airos.api.routes.users import router as users_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "health_router",
    "orders_router",
    "products_router",
    "suppliers_router",
    "users_router",
]
