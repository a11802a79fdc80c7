"""Adjust Stock Use Case: manual restock or write-off through the ledger."""

from dataclasses import dataclass

from airos.application.dto.mappers import product_to_response
from airos.application.dto.requests import AdjustStockRequest
from airos.application.dto.responses import AdjustStockResponse
from airos.config import get_logger
from airos.core.entities.product import Product, StockOperation
from airos.core.exceptions import ProductNotFoundError
from airos.core.interfaces.product_store import IProductStore
from airos.core.services import InventoryLedger

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of a stock adjustment."""

    product: Product
    operation: StockOperation
    quantity: int
    balance: int


class AdjustStockUseCase:
    """Add or subtract stock with the same atomic guarantees as order reservations."""

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from airos.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(self, product_id: int, request: AdjustStockRequest) -> AdjustStockResult:
        """
        Execute adjust stock use case.

        Raises:
            ProductNotFoundError: no such product.
            InsufficientStockError: subtracting more than is on hand.
        """
        logger.info(
            "adjust_stock_started",
            product_id=product_id,
            operation=request.operation.value,
            quantity=request.quantity,
        )

        store = await self._get_product_store()
        ledger = InventoryLedger(store)
        balance = await ledger.adjust(
            product_id, request.quantity, request.operation, request.reference
        )

        product = await store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        logger.info("adjust_stock_complete", product_id=product_id, balance=balance)
        return AdjustStockResult(
            product=product,
            operation=request.operation,
            quantity=request.quantity,
            balance=balance,
        )

    def to_response(self, result: AdjustStockResult) -> AdjustStockResponse:
        """Convert result to API response."""
        return AdjustStockResponse(
            product=product_to_response(result.product),
            operation=result.operation.value,
            quantity=result.quantity,
            balance=result.balance,
        )
