"""Transition Order Status Use Case: lifecycle move with stock effects."""

from airos.application.dto.mappers import order_to_response
from airos.application.dto.requests import UpdateOrderStatusRequest
from airos.application.dto.responses import OrderResponse
from airos.config import get_logger
from airos.core.entities.order import Order, OrderStatus
from airos.core.exceptions import OrderNotFoundError
from airos.core.interfaces.order_store import IOrderStore
from airos.core.interfaces.product_store import IProductStore
from airos.core.services import InventoryLedger, OrderLifecycle

logger = get_logger(__name__)


class TransitionOrderStatusUseCase:
    """Move an order along its lifecycle and persist the result."""

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

    async def execute(self, order_id: int, request: UpdateOrderStatusRequest) -> Order:
        """
        Execute the transition.

        Raises:
            OrderNotFoundError: no such order.
            InvalidStatusError: unknown target or illegal move.
        """
        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        previous = order.status
        lifecycle = OrderLifecycle(InventoryLedger(await self._get_product_store()))
        await lifecycle.transition(order, request.status)
        if request.payment_status is not None:
            order.payment_status = request.payment_status

        try:
            order = await order_store.update_order(order, expected_status=previous)
        except Exception:
            if order.status == OrderStatus.CANCELLED and previous.holds_reservation:
                logger.warning(
                    "order_cancel_not_saved_restoring_stock",
                    order_id=order_id,
                    order_number=order.order_number,
                )
                await lifecycle.reserve_lines(order)
            raise

        return order

    def to_response(self, order: Order) -> OrderResponse:
        """Convert result to API response."""
        return order_to_response(order)
