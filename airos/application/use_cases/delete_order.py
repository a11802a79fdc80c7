"""Delete Order Use Case: return held stock, then remove the record."""

from airos.config import get_logger
from airos.core.exceptions import OrderNotFoundError
from airos.core.interfaces.order_store import IOrderStore
from airos.core.interfaces.product_store import IProductStore
from airos.core.services import InventoryLedger, OrderLifecycle

logger = get_logger(__name__)


class DeleteOrderUseCase:
    """Delete an order, releasing its stock while it still holds a reservation."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        order_store: IOrderStore | None = None,
    ):
        self._product_store = product_store
        self._order_store = order_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from airos.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from airos.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def execute(self, order_id: int) -> None:
        """Execute delete order use case."""
        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        lifecycle = OrderLifecycle(InventoryLedger(await self._get_product_store()))
        released = await lifecycle.release_for_deletion(order)

        try:
            deleted = await order_store.delete_order(order_id, expected_status=order.status)
        except Exception:
            # A concurrent status change surfaces here as ConflictError.
            if released:
                logger.warning(
                    "order_delete_not_applied_restoring_stock",
                    order_id=order_id,
                    order_number=order.order_number,
                )
                await lifecycle.reserve_lines(order)
            raise

        if not deleted:
            # Removed concurrently; whoever removed it already handled its stock.
            if released:
                await lifecycle.reserve_lines(order)
            raise OrderNotFoundError(order_id)

        logger.info(
            "delete_order_complete",
            order_id=order_id,
            order_number=order.order_number,
            stock_released=released,
        )
