"""Tests for order status, edit and delete use cases."""

from unittest.mock import AsyncMock

import pytest

from airos.application.dto.requests import UpdateOrderRequest, UpdateOrderStatusRequest
from airos.application.use_cases import (
    DeleteOrderUseCase,
    TransitionOrderStatusUseCase,
    UpdateOrderUseCase,
)
from airos.core.entities.order import OrderStatus, PaymentStatus
from airos.core.exceptions import (
    ConflictError,
    InvalidStatusError,
    OrderNotEditableError,
    OrderNotFoundError,
)


@pytest.fixture
def mock_product_store(make_product):
    products = {
        1: make_product(id=1, name="Widget", sku="WID-001", price=10.0),
        2: make_product(id=2, name="Gadget", sku="GAD-001", price=5.0),
    }
    store = AsyncMock()
    store.get_product.side_effect = lambda pid: products.get(pid)
    store.decrement_stock.return_value = 5
    store.increment_stock.return_value = 5
    return store


@pytest.fixture
def mock_order_store():
    store = AsyncMock()
    store.update_order.side_effect = lambda order, expected_status=None: order
    store.delete_order.return_value = True
    return store


class TestTransitionOrderStatus:
    @pytest.fixture
    def use_case(self, mock_product_store, mock_order_store):
        return TransitionOrderStatusUseCase(
            product_store=mock_product_store, order_store=mock_order_store
        )

    async def test_confirm(self, use_case, mock_order_store, make_order):
        mock_order_store.get_order.return_value = make_order()

        order = await use_case.execute(
            1, UpdateOrderStatusRequest(status="confirmed", payment_status=PaymentStatus.PAID)
        )

        assert order.status == OrderStatus.CONFIRMED
        assert order.payment_status == PaymentStatus.PAID
        assert mock_order_store.update_order.call_args.kwargs["expected_status"] == OrderStatus.PENDING

    async def test_bogus_status(self, use_case, mock_order_store, make_order):
        mock_order_store.get_order.return_value = make_order()
        with pytest.raises(InvalidStatusError):
            await use_case.execute(1, UpdateOrderStatusRequest(status="bogus"))
        mock_order_store.update_order.assert_not_called()

    async def test_missing_order(self, use_case, mock_order_store):
        mock_order_store.get_order.return_value = None
        with pytest.raises(OrderNotFoundError):
            await use_case.execute(1, UpdateOrderStatusRequest(status="confirmed"))

    async def test_cancel_lost_race_takes_stock_back(
        self, use_case, mock_order_store, mock_product_store, make_order
    ):
        mock_order_store.get_order.return_value = make_order()
        mock_order_store.update_order.side_effect = ConflictError("status", "pending")

        with pytest.raises(ConflictError):
            await use_case.execute(1, UpdateOrderStatusRequest(status="cancelled"))

        assert mock_product_store.increment_stock.await_count == 2
        assert mock_product_store.decrement_stock.await_count == 2


class TestUpdateOrder:
    @pytest.fixture
    def use_case(self, mock_product_store, mock_order_store):
        return UpdateOrderUseCase(product_store=mock_product_store, order_store=mock_order_store)

    async def test_shipped_order_not_editable(self, use_case, mock_order_store, make_order):
        mock_order_store.get_order.return_value = make_order(status=OrderStatus.SHIPPED)

        with pytest.raises(OrderNotEditableError):
            await use_case.execute(1, UpdateOrderRequest(notes="late"))
        mock_order_store.update_order.assert_not_called()

    async def test_edit_recalculates(self, use_case, mock_order_store, make_order):
        mock_order_store.get_order.return_value = make_order()

        order = await use_case.execute(
            1,
            UpdateOrderRequest.model_validate(
                {"items": [{"product_id": 1, "quantity": 3}], "shipping": 4.0}
            ),
        )

        assert order.subtotal == 30.0
        assert order.total == 34.0

    async def test_notes_only_leaves_stock_alone(
        self, use_case, mock_order_store, mock_product_store, make_order
    ):
        mock_order_store.get_order.return_value = make_order()
        order = await use_case.execute(1, UpdateOrderRequest(notes="ring twice"))
        assert order.notes == "ring twice"
        mock_product_store.decrement_stock.assert_not_called()
        mock_product_store.increment_stock.assert_not_called()


class TestDeleteOrder:
    @pytest.fixture
    def use_case(self, mock_product_store, mock_order_store):
        return DeleteOrderUseCase(product_store=mock_product_store, order_store=mock_order_store)

    async def test_pending_releases(self, use_case, mock_order_store, mock_product_store, make_order):
        mock_order_store.get_order.return_value = make_order()
        await use_case.execute(1)
        assert mock_product_store.increment_stock.await_count == 2

    async def test_delivered_keeps_stock(
        self, use_case, mock_order_store, mock_product_store, make_order
    ):
        mock_order_store.get_order.return_value = make_order(status=OrderStatus.DELIVERED)
        await use_case.execute(1)
        mock_product_store.increment_stock.assert_not_called()
        mock_order_store.delete_order.assert_awaited_once_with(
            1, expected_status=OrderStatus.DELIVERED
        )

    async def test_missing(self, use_case, mock_order_store):
        mock_order_store.get_order.return_value = None
        with pytest.raises(OrderNotFoundError):
            await use_case.execute(1)

    async def test_status_changed_concurrently_restores_stock(
        self, use_case, mock_order_store, mock_product_store, make_order
    ):
        mock_order_store.get_order.return_value = make_order()
        mock_order_store.delete_order.side_effect = ConflictError(
            "status", "pending", message="Order 1 changed concurrently"
        )

        with pytest.raises(ConflictError):
            await use_case.execute(1)

        assert mock_product_store.increment_stock.await_count == 2
        assert mock_product_store.decrement_stock.await_count == 2
        mock_order_store.delete_order.assert_awaited_once_with(
            1, expected_status=OrderStatus.PENDING
        )
