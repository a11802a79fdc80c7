"""
Inventory ledger.

Owns the authoritative on-hand quantity of every product. Every mutation is
a single conditional update at the store, so concurrent reservations against
the same product can never drive stock below zero.
"""

from airos.config import get_logger
from airos.core.entities.product import MovementType, StockMovement, StockOperation
from airos.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from airos.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("quantity", "Quantity must be a whole number of at least 1", quantity)


class InventoryLedger:
    """
    Atomic reserve/release/commit operations over product stock.

    Pure service -- the product store is injected via constructor.
    """

    def __init__(self, product_store: IProductStore) -> None:
        self._product_store = product_store

    async def reserve(
        self,
        product_id: int,
        quantity: int,
        reference: str | None = None,
        movement_type: MovementType = MovementType.RESERVE,
    ) -> int:
        """
        Take `quantity` units out of stock.

        Returns:
            The new on-hand balance.

        Raises:
            ProductNotFoundError: product does not exist.
            InsufficientStockError: fewer than `quantity` units on hand;
                stock is left unchanged.
        """
        _check_quantity(quantity)

        balance = await self._product_store.decrement_stock(
            product_id, quantity, movement_type, reference
        )
        if balance is not None:
            logger.info(
                "stock_reserved",
                product_id=product_id,
                quantity=quantity,
                balance=balance,
                reference=reference,
            )
            return balance

        # The conditional update did not match: tell missing from short.
        product = await self._product_store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        logger.warning(
            "stock_reservation_rejected",
            product_id=product_id,
            requested=quantity,
            available=product.stock_quantity,
        )
        raise InsufficientStockError(
            product_id=product_id,
            requested=quantity,
            available=product.stock_quantity,
            product_name=product.name,
        )

    async def release(
        self,
        product_id: int,
        quantity: int,
        reference: str | None = None,
        movement_type: MovementType = MovementType.RELEASE,
    ) -> int:
        """Return `quantity` units to stock. No upper bound applies."""
        _check_quantity(quantity)

        balance = await self._product_store.increment_stock(
            product_id, quantity, movement_type, reference
        )
        if balance is None:
            raise ProductNotFoundError(product_id)

        logger.info(
            "stock_released",
            product_id=product_id,
            quantity=quantity,
            balance=balance,
            reference=reference,
        )
        return balance

    async def commit(
        self, product_id: int, quantity: int, reference: str | None = None
    ) -> None:
        """Mark a reservation as final. The balance does not change."""
        _check_quantity(quantity)

        product = await self._product_store.get_product(product_id)
        if product is None:
            # Historical orders may outlive their products.
            logger.warning(
                "stock_commit_skipped", product_id=product_id, reference=reference
            )
            return

        await self._product_store.add_movement(
            StockMovement(
                product_id=product_id,
                movement_type=MovementType.COMMIT,
                quantity=quantity,
                balance_after=product.stock_quantity,
                reference=reference,
            )
        )
        logger.info(
            "stock_committed",
            product_id=product_id,
            quantity=quantity,
            reference=reference,
        )

    async def adjust(
        self,
        product_id: int,
        quantity: int,
        operation: StockOperation,
        reference: str | None = None,
    ) -> int:
        """Manual stock correction (restock or write-off)."""
        if operation == StockOperation.ADD:
            return await self.release(
                product_id, quantity, reference, movement_type=MovementType.ADD
            )
        return await self.reserve(
            product_id, quantity, reference, movement_type=MovementType.SUBTRACT
        )

    async def is_low_stock(self, product_id: int) -> bool:
        """True when on-hand is at or below the product's minimum level."""
        product = await self._product_store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product.is_low_stock
