"""Update Order Use Case: full edit of a pending order."""

from airos.application.dto.mappers import order_to_response
from airos.application.dto.requests import UpdateOrderRequest
from airos.application.dto.responses import OrderResponse
from airos.config import get_logger
from airos.core.entities.order import (
    CustomerAddress,
    CustomerInfo,
    LineRequest,
    Order,
    OrderStatus,
)
from airos.core.exceptions import OrderNotFoundError
from airos.core.interfaces.order_store import IOrderStore
from airos.core.interfaces.product_store import IProductStore
from airos.core.services import InventoryLedger, OrderAssembler, OrderLifecycle

logger = get_logger(__name__)


class UpdateOrderUseCase:
    """
    Edit a pending order.

    Item changes are reconciled against stock by quantity difference; if the
    edited order cannot be saved, stock is reconciled back to the old items.
    """

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

    async def execute(self, order_id: int, request: UpdateOrderRequest) -> Order:
        """
        Execute update order use case.

        Raises:
            OrderNotFoundError: no such order.
            OrderNotEditableError: the order is past `pending`.
            ProductNotFoundError / InsufficientStockError: from new items.
        """
        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        product_store = await self._get_product_store()
        ledger = InventoryLedger(product_store)
        assembler = OrderAssembler(product_store, ledger)
        OrderLifecycle.ensure_editable(order)

        old_lines = [
            LineRequest(product_id=line.product_id, quantity=line.quantity)
            for line in order.items
        ]
        items_changed = request.items is not None
        if request.items is not None:
            order.items = await assembler.revise(
                order,
                [
                    LineRequest(product_id=item.product_id, quantity=item.quantity)
                    for item in request.items
                ],
            )

        if request.customer is not None:
            order.customer = CustomerInfo(
                name=request.customer.name,
                email=request.customer.email,
                phone=request.customer.phone,
                address=CustomerAddress(**request.customer.address.model_dump()),
            )
        if request.tax is not None:
            order.tax = request.tax
        if request.shipping is not None:
            order.shipping = request.shipping
        if request.payment_method is not None:
            order.payment_method = request.payment_method
        if request.payment_status is not None:
            order.payment_status = request.payment_status
        if "notes" in request.model_fields_set:
            order.notes = request.notes
        order.recalculate()

        try:
            order = await order_store.update_order(order, expected_status=OrderStatus.PENDING)
        except Exception:
            if items_changed:
                logger.warning("order_edit_not_saved_restoring_stock", order_id=order_id)
                await assembler.revise(order, old_lines)
            raise

        logger.info(
            "update_order_complete",
            order_id=order.id,
            items_changed=items_changed,
            total=order.total,
        )
        return order

    def to_response(self, order: Order) -> OrderResponse:
        """Convert result to API response."""
        return order_to_response(order)
