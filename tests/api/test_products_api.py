"""Tests for product endpoints."""

from unittest.mock import AsyncMock

import pytest

from airos.api.dependencies import (
    get_adjust_stock_use_case,
    get_inventory_ledger,
    get_prod_store,
)
from airos.api.main import app
from airos.application.use_cases import AdjustStockUseCase
from airos.core.entities.product import MovementType
from airos.core.entities.user import UserRole
from airos.core.services import InventoryLedger


AUTH_HEADERS = {"Authorization": "Bearer test-token"}


@pytest.fixture
def product_store(make_product):
    products = {1: make_product(id=1, stock_quantity=2, min_stock_level=2)}
    store = AsyncMock()
    store.get_product.side_effect = lambda pid: products.get(pid)
    app.dependency_overrides[get_prod_store] = lambda: store
    app.dependency_overrides[get_inventory_ledger] = lambda: InventoryLedger(store)
    app.dependency_overrides[get_adjust_stock_use_case] = lambda: AdjustStockUseCase(
        product_store=store
    )
    return store


class TestProductReads:
    async def test_list_total_uses_same_filters(self, client, login_as, product_store, make_product):
        login_as(UserRole.STAFF)
        product_store.list_products.return_value = [make_product()]
        product_store.count_products.return_value = 1

        response = await client.get(
            "/api/products?category=Electronics&search=wid&low_stock=true", headers=AUTH_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["total"] == 1
        product_store.count_products.assert_awaited_once_with(
            low_stock=True, category="Electronics", search="wid"
        )

    async def test_low_stock_status(self, client, login_as, product_store):
        login_as(UserRole.STAFF)

        response = await client.get("/api/products/1/low-stock", headers=AUTH_HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "product_id": 1,
            "is_low_stock": True,
            "stock_quantity": 2,
            "min_stock_level": 2,
        }

    async def test_low_stock_missing_product(self, client, login_as, product_store):
        login_as(UserRole.STAFF)

        response = await client.get("/api/products/9/low-stock", headers=AUTH_HEADERS)

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestAdjustStock:
    async def test_staff_forbidden(self, client, login_as, product_store):
        login_as(UserRole.STAFF)

        response = await client.put(
            "/api/products/1/stock",
            json={"quantity": 5, "operation": "add"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 403

    async def test_restock(self, client, login_as, product_store):
        login_as(UserRole.MANAGER)
        product_store.increment_stock.return_value = 7

        response = await client.put(
            "/api/products/1/stock",
            json={"quantity": 5, "operation": "add", "reference": "PO-17"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["balance"] == 7
        assert data["operation"] == "add"
        product_store.increment_stock.assert_awaited_once_with(
            1, 5, MovementType.ADD, "PO-17"
        )

    async def test_write_off_more_than_on_hand(self, client, login_as, product_store):
        login_as(UserRole.MANAGER)
        product_store.decrement_stock.return_value = None

        response = await client.put(
            "/api/products/1/stock",
            json={"quantity": 5, "operation": "subtract"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"

    async def test_zero_quantity_rejected(self, client, login_as, product_store):
        login_as(UserRole.MANAGER)

        response = await client.put(
            "/api/products/1/stock",
            json={"quantity": 0, "operation": "add"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 422
