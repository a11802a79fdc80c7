"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# Users / auth
class UserResponse(BaseModel):
    """User without credentials."""

    id: int
    name: str
    email: str
    role: str
    department: str | None = None
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime


class AuthResponse(BaseModel):
    """Successful login or registration."""

    token: str = Field(..., description="Bearer token")
    user: UserResponse


# Products
class ProductResponse(BaseModel):
    """Product with derived stock and margin figures."""

    id: int
    name: str
    description: str
    sku: str
    category: str
    price: float
    cost: float
    stock_quantity: int
    min_stock_level: int
    supplier_id: int | None = None
    unit: str
    is_active: bool
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_low_stock: bool = Field(..., description="Stock at or below the minimum level")
    profit_margin: float = Field(..., description="Markup over cost, percent")
    total_value: float = Field(..., description="price * stock_quantity")
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int = Field(..., description="Total matching products")
    limit: int
    offset: int


class LowStockStatusResponse(BaseModel):
    """Low-stock check for a single product."""

    product_id: int
    is_low_stock: bool
    stock_quantity: int
    min_stock_level: int


class StockMovementResponse(BaseModel):
    id: int
    product_id: int
    movement_type: str
    quantity: int
    balance_after: int
    reference: str | None = None
    created_at: datetime


class AdjustStockResponse(BaseModel):
    """Result of a manual stock adjustment."""

    product: ProductResponse
    operation: str
    quantity: int
    balance: int


class CategoryCountResponse(BaseModel):
    name: str
    value: int


# Suppliers
class SupplierResponse(BaseModel):
    """Supplier with derived credit figures."""

    id: int
    name: str
    code: str
    contact_person: dict[str, Any]
    address: dict[str, Any]
    full_address: str
    business_info: dict[str, Any]
    payment_terms: str
    credit_limit: float
    current_balance: float
    available_credit: float
    categories: list[str] = Field(default_factory=list)
    rating: int
    is_active: bool
    notes: str | None = None
    last_order_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class SupplierListResponse(BaseModel):
    suppliers: list[SupplierResponse]
    total: int


class RatingCountResponse(BaseModel):
    rating: int
    count: int


class SupplierStatsResponse(BaseModel):
    """Supplier overview for managers."""

    total_suppliers: int
    active_suppliers: int
    total_credit_limit: float
    total_balance: float
    by_rating: list[RatingCountResponse]
    top_by_balance: list[SupplierResponse]


# Orders
class OrderLineResponse(BaseModel):
    product_id: int
    product_name: str | None = None
    sku: str | None = None
    quantity: int
    price: float = Field(..., description="Unit price captured at order time")
    total: float


class CustomerResponse(BaseModel):
    name: str
    email: str
    phone: str
    address: dict[str, Any] = Field(default_factory=dict)


class OrderResponse(BaseModel):
    """Order with line items and totals."""

    id: int
    order_number: str
    customer: CustomerResponse
    items: list[OrderLineResponse]
    subtotal: float
    tax: float
    shipping: float
    total: float
    status: str
    payment_status: str
    payment_method: str
    notes: str | None = None
    created_by: int
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    limit: int
    offset: int


class StatusCountResponse(BaseModel):
    status: str
    count: int


class DailyTotalsResponse(BaseModel):
    day: str = Field(..., description="YYYY-MM-DD")
    count: int
    revenue: float


class OrderStatsResponse(BaseModel):
    """Order overview for an optional creation-date window."""

    total_orders: int
    total_revenue: float
    by_status: list[StatusCountResponse]
    daily: list[DailyTotalsResponse]


# Dashboard
class DashboardStatsResponse(BaseModel):
    """Headline figures for the dashboard."""

    total_users: int
    total_products: int
    total_orders: int
    total_suppliers: int
    total_revenue: float = Field(..., description="Revenue over delivered orders")
    monthly_revenue: float
    last_month_revenue: float
    revenue_trend: float = Field(..., description="Month-over-month change, percent")
    pending_orders: int
    completed_orders: int
    low_stock_products: int
    total_customers: int = Field(..., description="Distinct customer emails")
    fulfillment_rate: float = Field(..., description="Delivered share of all orders, percent")
    avg_order_value: float


class SalesChartPointResponse(BaseModel):
    day: str
    revenue: float
    orders: int


class SalesChartResponse(BaseModel):
    days: int
    points: list[SalesChartPointResponse]


# Health
class HealthResponse(BaseModel):
    """Service health."""

    status: str = Field(..., description="healthy | degraded | unhealthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.now)
    database: str | None = Field(default=None, description="Database status")
    missing_tables: list[str] = Field(default_factory=list)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
