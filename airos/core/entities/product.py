"""Product and stock movement domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from airos.core.time_utils import utcnow


class ProductCategory(str, Enum):
    """Catalog categories shared by products and suppliers."""

    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME_GARDEN = "Home & Garden"
    SPORTS = "Sports"
    OTHER = "Other"


class ProductUnit(str, Enum):
    """Units a product is stocked in."""

    PCS = "pcs"
    KG = "kg"
    LITER = "liter"
    BOX = "box"
    PAIR = "pair"
    SET = "set"


class StockOperation(str, Enum):
    """Direction of a manual stock adjustment."""

    ADD = "add"
    SUBTRACT = "subtract"


class MovementType(str, Enum):
    """Types of stock movements recorded by the ledger."""

    RESERVE = "reserve"
    RELEASE = "release"
    COMMIT = "commit"
    ADD = "add"
    SUBTRACT = "subtract"


class Product(BaseModel):
    """A stocked product. `stock_quantity` is owned by the inventory ledger."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    sku: str = Field(..., min_length=1)
    category: ProductCategory
    price: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    min_stock_level: int = Field(default=10, ge=0)
    supplier_id: int | None = None
    unit: ProductUnit = ProductUnit.PCS
    is_active: bool = True
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        return [t.strip() for t in v if t.strip()]

    @property
    def is_low_stock(self) -> bool:
        """Stock at or below the configured minimum."""
        return self.stock_quantity <= self.min_stock_level

    @property
    def profit_margin(self) -> float:
        """Markup over cost as a percentage, 0 when cost is unknown."""
        if self.cost > 0:
            return round((self.price - self.cost) / self.cost * 100, 2)
        return 0.0

    @property
    def total_value(self) -> float:
        """Stock value at selling price."""
        return self.price * self.stock_quantity


class StockMovement(BaseModel):
    """Records a single ledger mutation against a product."""

    id: int | None = None
    product_id: int
    movement_type: MovementType
    quantity: int  # always positive
    balance_after: int
    reference: str | None = None  # e.g. order number
    created_at: datetime = Field(default_factory=utcnow)
