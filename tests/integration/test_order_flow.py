"""Order fulfillment against a real SQLite database."""

import asyncio

import pytest

from airos.application.dto.requests import (
    CreateOrderRequest,
    UpdateOrderRequest,
    UpdateOrderStatusRequest,
)
from airos.application.use_cases import (
    CreateOrderUseCase,
    DeleteOrderUseCase,
    TransitionOrderStatusUseCase,
    UpdateOrderUseCase,
)
from airos.core.entities.order import OrderStatus
from airos.core.entities.product import MovementType
from airos.core.exceptions import (
    ConflictError,
    InsufficientStockError,
    InvalidStatusError,
    OrderNotEditableError,
    OrderNotFoundError,
)
from airos.core.time_utils import utcnow
from airos.infrastructure.storage.sqlite import get_order_store, get_product_store


@pytest.fixture
async def products(sqlite_db, make_product):
    store = await get_product_store()
    widget = await store.create_product(
        make_product(id=None, name="Widget", sku="WID-001", price=10.0, stock_quantity=5)
    )
    gadget = await store.create_product(
        make_product(id=None, name="Gadget", sku="GAD-001", price=5.0, stock_quantity=1)
    )
    return widget, gadget


def order_request(widget_id: int, gadget_id: int, gadget_qty: int = 1) -> CreateOrderRequest:
    return CreateOrderRequest.model_validate(
        {
            "customer": {"name": "Budi", "email": "budi@example.com", "phone": "0811"},
            "items": [
                {"product_id": widget_id, "quantity": 2},
                {"product_id": gadget_id, "quantity": gadget_qty},
            ],
            "tax": 3.0,
            "shipping": 2.0,
            "payment_method": "cash",
        }
    )


async def stock_of(product_id: int) -> int:
    product = await (await get_product_store()).get_product(product_id)
    return product.stock_quantity


async def move(order_id: int, status: str):
    return await TransitionOrderStatusUseCase().execute(
        order_id, UpdateOrderStatusRequest(status=status)
    )


class TestCreateOrder:
    async def test_totals_number_and_reservation(self, products):
        widget, gadget = products

        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        assert order.subtotal == 25.0
        assert order.total == 30.0
        today = utcnow().strftime("%Y%m%d")
        assert order.order_number == f"ORD-{today}-001"
        assert await stock_of(widget.id) == 3
        assert await stock_of(gadget.id) == 0

        single = CreateOrderRequest.model_validate(
            {
                "customer": {"name": "Ani", "email": "ani@example.com", "phone": "0812"},
                "items": [{"product_id": widget.id, "quantity": 1}],
                "payment_method": "cash",
            }
        )
        second = await CreateOrderUseCase().execute(single, created_by=1)
        assert second.order_number == f"ORD-{today}-002"

    async def test_failed_second_line_rolls_back_first(self, products):
        widget, gadget = products

        with pytest.raises(InsufficientStockError):
            await CreateOrderUseCase().execute(
                order_request(widget.id, gadget.id, gadget_qty=2), created_by=1
            )

        assert await stock_of(widget.id) == 5
        assert await stock_of(gadget.id) == 1
        assert await (await get_order_store()).count_orders() == 0

    async def test_concurrent_orders_for_last_unit(self, products):
        _, gadget = products
        request = CreateOrderRequest.model_validate(
            {
                "customer": {"name": "Budi", "email": "budi@example.com", "phone": "0811"},
                "items": [{"product_id": gadget.id, "quantity": 1}],
                "payment_method": "cash",
            }
        )

        results = await asyncio.gather(
            CreateOrderUseCase().execute(request, created_by=1),
            CreateOrderUseCase().execute(request, created_by=1),
            return_exceptions=True,
        )

        created = [r for r in results if not isinstance(r, Exception)]
        failed = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(created) == 1
        assert len(failed) == 1
        assert await stock_of(gadget.id) == 0


class TestOrderLifecycle:
    async def test_cancel_restores_stock(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        await move(order.id, "confirmed")
        cancelled = await move(order.id, "cancelled")

        assert cancelled.status == OrderStatus.CANCELLED
        assert await stock_of(widget.id) == 5
        assert await stock_of(gadget.id) == 1

    async def test_full_lifecycle_commits_once(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        for status in ("confirmed", "processing", "shipped", "delivered"):
            order = await move(order.id, status)

        assert order.status == OrderStatus.DELIVERED
        assert order.shipped_at is not None
        assert order.delivered_at is not None
        assert await stock_of(widget.id) == 3

        movements = await (await get_product_store()).get_movements(widget.id)
        types = [m.movement_type for m in movements]
        assert types.count(MovementType.COMMIT) == 1
        assert types.count(MovementType.RESERVE) == 1

    async def test_bogus_and_skipped_statuses(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        with pytest.raises(InvalidStatusError):
            await move(order.id, "bogus")
        with pytest.raises(InvalidStatusError):
            await move(order.id, "shipped")

        reloaded = await (await get_order_store()).get_order(order.id)
        assert reloaded.status == OrderStatus.PENDING

    async def test_shipped_order_is_not_editable(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)
        for status in ("confirmed", "processing", "shipped"):
            await move(order.id, status)

        with pytest.raises(OrderNotEditableError):
            await UpdateOrderUseCase().execute(order.id, UpdateOrderRequest(notes="late"))


class TestEditAndDelete:
    async def test_edit_reconciles_stock(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        updated = await UpdateOrderUseCase().execute(
            order.id,
            UpdateOrderRequest.model_validate(
                {"items": [{"product_id": widget.id, "quantity": 4}]}
            ),
        )

        assert updated.subtotal == 40.0
        assert await stock_of(widget.id) == 1
        assert await stock_of(gadget.id) == 1

    async def test_edit_after_product_removed(self, products, make_product):
        widget, gadget = products
        store = await get_product_store()
        other = await store.create_product(
            make_product(id=None, name="Other", sku="OTH-001", price=4.0, stock_quantity=5)
        )
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)
        await store.delete_product(gadget.id)

        updated = await UpdateOrderUseCase().execute(
            order.id,
            UpdateOrderRequest.model_validate(
                {
                    "items": [
                        {"product_id": widget.id, "quantity": 2},
                        {"product_id": other.id, "quantity": 3},
                    ]
                }
            ),
        )

        assert [(i.product_id, i.quantity) for i in updated.items] == [(widget.id, 2), (other.id, 3)]
        assert await stock_of(widget.id) == 3
        assert await stock_of(other.id) == 2

    async def test_delete_pending_returns_stock(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        await DeleteOrderUseCase().execute(order.id)

        assert await (await get_order_store()).get_order(order.id) is None
        assert await stock_of(widget.id) == 5
        assert await stock_of(gadget.id) == 1

    async def test_delete_delivered_keeps_stock(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)
        for status in ("confirmed", "processing", "shipped", "delivered"):
            await move(order.id, status)

        await DeleteOrderUseCase().execute(order.id)

        assert await stock_of(widget.id) == 3

    async def test_cancel_and_delete_together_release_once(self, products):
        widget, gadget = products
        order = await CreateOrderUseCase().execute(order_request(widget.id, gadget.id), created_by=1)

        results = await asyncio.gather(
            move(order.id, "cancelled"),
            DeleteOrderUseCase().execute(order.id),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert all(isinstance(e, (ConflictError, OrderNotFoundError)) for e in failures)
        assert await stock_of(widget.id) == 5
        assert await stock_of(gadget.id) == 1
