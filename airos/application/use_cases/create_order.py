"""Create Order Use Case: reserve stock, mint a number, persist."""

from airos.application.dto.mappers import order_to_response
from airos.application.dto.requests import CreateOrderRequest
from airos.application.dto.responses import OrderResponse
from airos.config import get_logger, get_settings
from airos.core.entities.order import CustomerAddress, CustomerInfo, LineRequest, Order
from airos.core.interfaces.order_store import IOrderStore, ISequenceStore
from airos.core.interfaces.product_store import IProductStore
from airos.core.services import (
    InventoryLedger,
    OrderAssembler,
    OrderLifecycle,
    SequenceGenerator,
)
from airos.core.time_utils import utcnow

logger = get_logger(__name__)


class CreateOrderUseCase:
    """
    Create an order.

    Stock for every line is reserved by the assembler. If the order cannot
    be numbered or saved, those reservations are released again before the
    error propagates.
    """

    def __init__(
        self,
        product_store: IProductStore | None = None,
        order_store: IOrderStore | None = None,
        sequence_store: ISequenceStore | None = None,
        order_number_prefix: str | None = None,
    ):
        self._product_store = product_store
        self._order_store = order_store
        self._sequence_store = sequence_store
        self._prefix = order_number_prefix

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

    async def _get_sequence_store(self) -> ISequenceStore:
        if self._sequence_store is None:
            from airos.infrastructure.storage.sqlite import get_sequence_store

            self._sequence_store = await get_sequence_store()
        return self._sequence_store

    async def execute(self, request: CreateOrderRequest, created_by: int) -> Order:
        """Execute create order use case."""
        logger.info(
            "create_order_started",
            lines=len(request.items),
            created_by=created_by,
        )

        product_store = await self._get_product_store()
        order_store = await self._get_order_store()
        sequence = SequenceGenerator(
            await self._get_sequence_store(),
            prefix=self._prefix or get_settings().inventory.order_number_prefix,
        )
        ledger = InventoryLedger(product_store)
        assembler = OrderAssembler(product_store, ledger)

        customer = CustomerInfo(
            name=request.customer.name,
            email=request.customer.email,
            phone=request.customer.phone,
            address=CustomerAddress(**request.customer.address.model_dump()),
        )
        lines = [
            LineRequest(product_id=item.product_id, quantity=item.quantity)
            for item in request.items
        ]

        # 1. Price and reserve (rolled back inside the assembler on failure)
        order = await assembler.assemble(
            customer=customer,
            requested_lines=lines,
            payment_method=request.payment_method,
            created_by=created_by,
            tax=request.tax,
            shipping=request.shipping,
            notes=request.notes,
        )

        # 2. Number and persist; give the stock back if either fails
        try:
            order.created_at = utcnow()
            order.order_number = await sequence.next(order.created_at.date())
            order = await order_store.create_order(order)
        except Exception:
            logger.warning("create_order_persist_failed", order_number=order.order_number)
            await OrderLifecycle(ledger).release_lines(order)
            raise

        logger.info(
            "create_order_complete",
            order_id=order.id,
            order_number=order.order_number,
            total=order.total,
        )
        return order

    def to_response(self, order: Order) -> OrderResponse:
        """Convert result to API response."""
        return order_to_response(order)
