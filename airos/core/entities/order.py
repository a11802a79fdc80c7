"""Order domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from airos.core.time_utils import utcnow


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @property
    def holds_reservation(self) -> bool:
        """Stock taken for this order is still returnable."""
        return self in (OrderStatus.PENDING, OrderStatus.CONFIRMED)


class PaymentStatus(str, Enum):
    """Payment state of an order."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CASH = "cash"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    ONLINE_PAYMENT = "online_payment"


class CustomerAddress(BaseModel):
    """Shipping address, all parts optional."""

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class CustomerInfo(BaseModel):
    """Customer snapshot copied onto the order at creation time."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    address: CustomerAddress = Field(default_factory=CustomerAddress)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class LineRequest(BaseModel):
    """A requested product/quantity pair, before pricing."""

    product_id: int
    quantity: int = Field(..., ge=1)


class OrderLine(BaseModel):
    """A single line item; price is captured when the stock is reserved."""

    product_id: int
    product_name: str | None = None
    sku: str | None = None
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    total: float = 0.0

    @model_validator(mode="after")
    def compute_total(self) -> "OrderLine":
        self.total = round(self.price * self.quantity, 2)
        return self


class Order(BaseModel):
    """An order with embedded line items."""

    id: int | None = None
    order_number: str | None = None
    customer: CustomerInfo
    items: list[OrderLine] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = Field(default=0.0, ge=0)
    shipping: float = Field(default=0.0, ge=0)
    total: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod
    notes: str | None = Field(default=None, max_length=500)
    created_by: int
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def compute_totals(self) -> "Order":
        """Compute subtotal and total from the line items."""
        self.subtotal = round(sum(line.total for line in self.items), 2)
        self.total = round(self.subtotal + self.tax + self.shipping, 2)
        return self

    def recalculate(self) -> "Order":
        """Recompute totals after items, tax or shipping changed in place."""
        for line in self.items:
            line.total = round(line.price * line.quantity, 2)
        self.subtotal = round(sum(line.total for line in self.items), 2)
        self.total = round(self.subtotal + self.tax + self.shipping, 2)
        return self

    def quantities_by_product(self) -> dict[int, int]:
        """Total ordered quantity per product."""
        totals: dict[int, int] = {}
        for line in self.items:
            totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity
        return totals
