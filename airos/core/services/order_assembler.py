"""
Order assembler.

Turns requested line items into a priced order draft, reserving stock line
by line. A failed attempt never leaves partial stock decrements behind:
every reservation made so far is recorded and released again before the
error propagates.
"""

from dataclasses import dataclass, field

from airos.config import get_logger
from airos.core.entities.order import (
    CustomerInfo,
    LineRequest,
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
)
from airos.core.exceptions import ProductNotFoundError, ValidationError
from airos.core.interfaces.product_store import IProductStore
from airos.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)


@dataclass
class ReservationLog:
    """Compensation log of reservations made during one attempt."""

    reference: str | None = None
    entries: list[tuple[int, int]] = field(default_factory=list)

    def record(self, product_id: int, quantity: int) -> None:
        self.entries.append((product_id, quantity))

    async def rollback(self, ledger: InventoryLedger) -> None:
        """Release every recorded reservation, newest first."""
        while self.entries:
            product_id, quantity = self.entries.pop()
            await ledger.release(product_id, quantity, self.reference)
            logger.info(
                "stock_reservation_rolled_back",
                product_id=product_id,
                quantity=quantity,
                reference=self.reference,
            )


class OrderAssembler:
    """
    Builds validated, priced order drafts backed by stock reservations.

    Pure service -- stores and ledger are injected via constructor.
    """

    def __init__(self, product_store: IProductStore, ledger: InventoryLedger) -> None:
        self._product_store = product_store
        self._ledger = ledger

    async def assemble(
        self,
        customer: CustomerInfo,
        requested_lines: list[LineRequest],
        payment_method: PaymentMethod,
        created_by: int,
        tax: float = 0.0,
        shipping: float = 0.0,
        notes: str | None = None,
    ) -> Order:
        """
        Price and reserve every requested line.

        Returns:
            An unsaved Order in status `pending`.

        Raises:
            ValidationError: no lines requested.
            ProductNotFoundError: a line references a missing product.
            InsufficientStockError: a line cannot be reserved.
        """
        if not requested_lines:
            raise ValidationError("items", "Order must contain at least one item")

        log = ReservationLog()
        lines: list[OrderLine] = []
        try:
            for request in requested_lines:
                lines.append(await self._reserve_line(request, log))
        except Exception:
            logger.warning(
                "order_assembly_failed",
                reserved_lines=len(log.entries),
                requested_lines=len(requested_lines),
            )
            await log.rollback(self._ledger)
            raise

        order = Order(
            customer=customer,
            items=lines,
            tax=tax or 0.0,
            shipping=shipping or 0.0,
            status=OrderStatus.PENDING,
            payment_method=payment_method,
            notes=notes,
            created_by=created_by,
        )
        logger.info(
            "order_assembled",
            lines=len(lines),
            subtotal=order.subtotal,
            total=order.total,
        )
        return order

    async def revise(
        self, order: Order, requested_lines: list[LineRequest]
    ) -> list[OrderLine]:
        """
        Re-price an order's lines and reconcile its reservations.

        Only the per-product quantity difference touches stock: increases
        are reserved first (and rolled back on failure), decreases are
        released afterwards. A decrease for a product that no longer exists
        is skipped.
        """
        if not requested_lines:
            raise ValidationError("items", "Order must contain at least one item")

        reference = order.order_number
        old = order.quantities_by_product()
        new: dict[int, int] = {}
        for request in requested_lines:
            new[request.product_id] = new.get(request.product_id, 0) + request.quantity

        lines: list[OrderLine] = []
        for request in requested_lines:
            product = await self._product_store.get_product(request.product_id)
            if product is None:
                raise ProductNotFoundError(request.product_id)
            lines.append(
                OrderLine(
                    product_id=product.id,  # type: ignore[arg-type]
                    product_name=product.name,
                    sku=product.sku,
                    quantity=request.quantity,
                    price=product.price,
                )
            )

        log = ReservationLog(reference=reference)
        try:
            for product_id, quantity in new.items():
                delta = quantity - old.get(product_id, 0)
                if delta > 0:
                    await self._ledger.reserve(product_id, delta, reference)
                    log.record(product_id, delta)
        except Exception:
            await log.rollback(self._ledger)
            raise

        for product_id, quantity in old.items():
            delta = quantity - new.get(product_id, 0)
            if delta <= 0:
                continue
            try:
                await self._ledger.release(product_id, delta, reference)
            except ProductNotFoundError:
                logger.warning(
                    "stock_release_skipped_missing_product",
                    order_number=reference,
                    product_id=product_id,
                )

        logger.info("order_lines_revised", order_id=order.id, lines=len(lines))
        return lines

    async def _reserve_line(self, request: LineRequest, log: ReservationLog) -> OrderLine:
        product = await self._product_store.get_product(request.product_id)
        if product is None:
            raise ProductNotFoundError(request.product_id)

        await self._ledger.reserve(product.id, request.quantity)  # type: ignore[arg-type]
        log.record(product.id, request.quantity)  # type: ignore[arg-type]

        # Price is captured from the same read that preceded the reservation.
        return OrderLine(
            product_id=product.id,  # type: ignore[arg-type]
            product_name=product.name,
            sku=product.sku,
            quantity=request.quantity,
            price=product.price,
        )
