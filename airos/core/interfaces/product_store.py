"""Abstract interface for product storage."""

from abc import ABC, abstractmethod

from airos.core.entities.product import MovementType, Product, StockMovement
from airos.core.entities.stats import CategoryCount


class IProductStore(ABC):
    """Interface for product persistence and atomic stock updates."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """
        Create a new product, recording opening stock as an `add` movement.

        Raises DuplicateSkuError on SKU clash.
        """
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def get_product_by_sku(self, sku: str) -> Product | None:
        """Get product by (normalized) SKU."""
        pass

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Update catalog fields. Never touches stock_quantity."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> bool:
        """Delete a product. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        low_stock: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List products, newest first."""
        pass

    @abstractmethod
    async def count_products(
        self,
        low_stock: bool = False,
        category: str | None = None,
        search: str | None = None,
    ) -> int:
        """Count products, optionally only those at or below minimum stock."""
        pass

    @abstractmethod
    async def category_distribution(self) -> list[CategoryCount]:
        """Product count per category, largest first."""
        pass

    @abstractmethod
    async def decrement_stock(
        self,
        product_id: int,
        quantity: int,
        movement_type: MovementType,
        reference: str | None = None,
    ) -> int | None:
        """
        Atomically take `quantity` units if at least that many are on hand.

        Returns the new balance, or None when the product is missing or
        holds less than `quantity`. Records a stock movement on success.
        """
        pass

    @abstractmethod
    async def increment_stock(
        self,
        product_id: int,
        quantity: int,
        movement_type: MovementType,
        reference: str | None = None,
    ) -> int | None:
        """Atomically add units. Returns the new balance, None if missing."""
        pass

    @abstractmethod
    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Record a stock movement that does not change the balance."""
        pass

    @abstractmethod
    async def get_movements(
        self, product_id: int, limit: int = 100
    ) -> list[StockMovement]:
        """Get movements for a product, newest first."""
        pass
