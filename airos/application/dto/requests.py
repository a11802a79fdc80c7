"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
"""

from pydantic import BaseModel, Field

from airos.core.entities.order import PaymentMethod, PaymentStatus
from airos.core.entities.product import ProductCategory, ProductUnit, StockOperation
from airos.core.entities.supplier import BalanceOperation, PaymentTerms
from airos.core.entities.user import UserRole


# Auth / users
class RegisterRequest(BaseModel):
    """Public self-registration."""

    name: str = Field(..., min_length=1, max_length=100, description="Full name")
    email: str = Field(..., min_length=3, description="Login email")
    password: str = Field(..., min_length=1, description="Plain-text password")
    department: str | None = Field(default=None, description="Department")


class LoginRequest(BaseModel):
    """Email/password login."""

    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Plain-text password")


class UpdateProfileRequest(BaseModel):
    """Changes a user may make to their own account."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3)
    department: str | None = None
    password: str | None = Field(default=None, min_length=1, description="New password")


class UpdateUserRequest(BaseModel):
    """Admin edit of another user."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3)
    role: UserRole | None = None
    department: str | None = None
    is_active: bool | None = None


# Products
class CreateProductRequest(BaseModel):
    """Create a product with its opening stock."""

    name: str = Field(..., min_length=1, max_length=100, description="Product name")
    description: str = Field(default="", max_length=500)
    sku: str = Field(..., min_length=1, description="Stock keeping unit")
    category: ProductCategory
    price: float = Field(..., ge=0, description="Selling price")
    cost: float = Field(..., ge=0, description="Unit cost")
    stock_quantity: int = Field(default=0, ge=0, description="Opening stock")
    min_stock_level: int | None = Field(
        default=None, ge=0, description="Low-stock threshold (configured default if omitted)"
    )
    supplier_id: int | None = None
    unit: ProductUnit = ProductUnit.PCS
    is_active: bool = True
    image: str | None = None
    tags: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    """Catalog edit. Stock only changes through stock adjustments and orders."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    sku: str | None = Field(default=None, min_length=1)
    category: ProductCategory | None = None
    price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    min_stock_level: int | None = Field(default=None, ge=0)
    supplier_id: int | None = None
    unit: ProductUnit | None = None
    is_active: bool | None = None
    image: str | None = None
    tags: list[str] | None = None


class AdjustStockRequest(BaseModel):
    """Manual stock correction."""

    quantity: int = Field(..., ge=1, description="Units to add or subtract")
    operation: StockOperation = Field(..., description="add or subtract")
    reference: str | None = Field(default=None, description="Free-text reason")


# Suppliers
class ContactPersonRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    position: str | None = None


class SupplierAddressRequest(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "Indonesia"


class BusinessInfoRequest(BaseModel):
    tax_id: str | None = None
    registration_number: str | None = None
    website: str | None = None


class CreateSupplierRequest(BaseModel):
    """Create a supplier."""

    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=20, description="Unique supplier code")
    contact_person: ContactPersonRequest
    address: SupplierAddressRequest
    business_info: BusinessInfoRequest = Field(default_factory=BusinessInfoRequest)
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    credit_limit: float = Field(default=0.0, ge=0)
    categories: list[ProductCategory] = Field(default_factory=list)
    rating: int = Field(default=3, ge=1, le=5)
    is_active: bool = True
    notes: str | None = Field(default=None, max_length=1000)


class UpdateSupplierRequest(BaseModel):
    """Supplier profile edit. The balance moves through balance adjustments."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    code: str | None = Field(default=None, min_length=1, max_length=20)
    contact_person: ContactPersonRequest | None = None
    address: SupplierAddressRequest | None = None
    business_info: BusinessInfoRequest | None = None
    payment_terms: PaymentTerms | None = None
    credit_limit: float | None = Field(default=None, ge=0)
    categories: list[ProductCategory] | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    is_active: bool | None = None
    notes: str | None = Field(default=None, max_length=1000)


class AdjustBalanceRequest(BaseModel):
    """Supplier balance change; subtraction floors at zero."""

    amount: float = Field(..., gt=0)
    operation: BalanceOperation


# Orders
class CustomerAddressRequest(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class CustomerRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Customer name")
    email: str = Field(..., min_length=3, description="Customer email")
    phone: str = Field(..., min_length=1, description="Customer phone")
    address: CustomerAddressRequest = Field(default_factory=CustomerAddressRequest)


class OrderItemRequest(BaseModel):
    product_id: int = Field(..., description="Product to order")
    quantity: int = Field(..., ge=1, description="Units to order")


class CreateOrderRequest(BaseModel):
    """Create an order; stock is reserved for every item."""

    customer: CustomerRequest
    items: list[OrderItemRequest] = Field(..., min_length=1)
    tax: float = Field(default=0.0, ge=0)
    shipping: float = Field(default=0.0, ge=0)
    payment_method: PaymentMethod
    notes: str | None = Field(default=None, max_length=500)


class UpdateOrderRequest(BaseModel):
    """Full edit of a pending order. Omitted fields are left unchanged."""

    customer: CustomerRequest | None = None
    items: list[OrderItemRequest] | None = Field(default=None, min_length=1)
    tax: float | None = Field(default=None, ge=0)
    shipping: float | None = Field(default=None, ge=0)
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus | None = None
    notes: str | None = Field(default=None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    """Lifecycle move; the status is validated by the order lifecycle."""

    status: str = Field(..., description="Target status")
    payment_status: PaymentStatus | None = Field(
        default=None, description="Optional payment status update"
    )
