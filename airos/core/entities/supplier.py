"""Supplier domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from airos.core.entities.product import ProductCategory
from airos.core.time_utils import utcnow


class PaymentTerms(str, Enum):
    """Supplier payment terms."""

    IMMEDIATE = "immediate"
    NET_15 = "net_15"
    NET_30 = "net_30"
    NET_60 = "net_60"
    NET_90 = "net_90"


class BalanceOperation(str, Enum):
    """Direction of a supplier balance adjustment."""

    ADD = "add"
    SUBTRACT = "subtract"


class ContactPerson(BaseModel):
    """Primary contact at a supplier."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    position: str | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class SupplierAddress(BaseModel):
    """Postal address of a supplier."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str = "Indonesia"


class BusinessInfo(BaseModel):
    """Registration details of a supplier."""

    tax_id: str | None = None
    registration_number: str | None = None
    website: str | None = None


class Supplier(BaseModel):
    """A supplier with a credit line."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=20)
    contact_person: ContactPerson
    address: SupplierAddress
    business_info: BusinessInfo = Field(default_factory=BusinessInfo)
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    credit_limit: float = Field(default=0.0, ge=0)
    current_balance: float = 0.0
    categories: list[ProductCategory] = Field(default_factory=list)
    rating: int = Field(default=3, ge=1, le=5)
    is_active: bool = True
    notes: str | None = Field(default=None, max_length=1000)
    last_order_date: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def available_credit(self) -> float:
        return max(0.0, self.credit_limit - self.current_balance)

    @property
    def full_address(self) -> str:
        a = self.address
        return f"{a.street}, {a.city}, {a.state} {a.zip_code}, {a.country}"

    def is_credit_limit_exceeded(self, amount: float = 0.0) -> bool:
        """True when charging `amount` would push the balance past the limit."""
        return self.current_balance + amount > self.credit_limit
