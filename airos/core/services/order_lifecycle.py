"""
Order lifecycle state machine.

    pending -> confirmed -> processing -> shipped -> delivered
        \\__________\\____________\\____________\\--> cancelled

`delivered` and `cancelled` are terminal. Only the next forward state or
`cancelled` is a legal target.
"""

from airos.config import get_logger
from airos.core.entities.order import Order, OrderStatus
from airos.core.exceptions import (
    InvalidStatusError,
    OrderNotEditableError,
    ProductNotFoundError,
)
from airos.core.services.inventory_ledger import InventoryLedger
from airos.core.time_utils import utcnow

logger = get_logger(__name__)


TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def parse_status(value: str | OrderStatus) -> OrderStatus:
    """Coerce a raw value into an OrderStatus or raise InvalidStatusError."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        raise InvalidStatusError(str(value)) from None


class OrderLifecycle:
    """
    Governs status transitions and their stock side effects.

    Transitions mutate the order in memory; persisting it is the caller's job.
    """

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    @staticmethod
    def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
        return target in TRANSITIONS[current]

    async def transition(self, order: Order, new_status: str | OrderStatus) -> Order:
        """
        Move the order to `new_status`.

        Raises:
            InvalidStatusError: unknown status, or not reachable from the
                current one.
        """
        target = parse_status(new_status)
        current = order.status
        if not self.can_transition(current, target):
            raise InvalidStatusError(target.value, current=current.value)

        now = utcnow()
        if target == OrderStatus.CANCELLED and current.holds_reservation:
            await self.release_lines(order)
        elif target == OrderStatus.PROCESSING:
            for line in order.items:
                await self._ledger.commit(line.product_id, line.quantity, order.order_number)
        elif target == OrderStatus.SHIPPED:
            order.shipped_at = now
        elif target == OrderStatus.DELIVERED:
            order.delivered_at = now

        order.status = target
        order.updated_at = now
        logger.info(
            "order_status_changed",
            order_id=order.id,
            order_number=order.order_number,
            from_status=current.value,
            to_status=target.value,
        )
        return order

    @staticmethod
    def ensure_editable(order: Order) -> None:
        """Full edits are only allowed while the order is pending."""
        if order.status != OrderStatus.PENDING:
            raise OrderNotEditableError(order.id, order.status.value)

    async def release_for_deletion(self, order: Order) -> bool:
        """Return reserved stock before an order record is removed."""
        if not order.status.holds_reservation:
            return False
        await self.release_lines(order)
        return True

    async def release_lines(self, order: Order) -> None:
        """Release every line of the order back into stock."""
        for line in order.items:
            try:
                await self._ledger.release(line.product_id, line.quantity, order.order_number)
            except ProductNotFoundError:
                logger.warning(
                    "stock_release_skipped_missing_product",
                    order_number=order.order_number,
                    product_id=line.product_id,
                )

    async def reserve_lines(self, order: Order) -> None:
        """Re-take stock for every line, undoing a release that could not be saved."""
        taken: list[tuple[int, int]] = []
        try:
            for line in order.items:
                await self._ledger.reserve(line.product_id, line.quantity, order.order_number)
                taken.append((line.product_id, line.quantity))
        except Exception:
            for product_id, quantity in reversed(taken):
                await self._ledger.release(product_id, quantity, order.order_number)
            raise
