"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from airos.core.entities.order import CustomerInfo, Order, OrderLine, PaymentMethod
from airos.core.entities.product import Product, ProductCategory


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    mock.storage.acquire_timeout = 10.0
    return mock


@pytest.fixture
async def sqlite_db(mock_settings, temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """A schema-initialized temp database behind the global connection pool."""
    import airos.infrastructure.storage.sqlite.connection as conn_module
    from airos.infrastructure.storage.sqlite.connection import close_pool
    from airos.infrastructure.storage.sqlite.schema import initialize_database

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        await initialize_database()
        try:
            yield temp_db_path
        finally:
            await close_pool()


@pytest.fixture
def make_product():
    """Factory for product entities."""

    def _make(**overrides) -> Product:
        data = {
            "id": 1,
            "name": "Widget",
            "sku": "WID-001",
            "category": ProductCategory.ELECTRONICS,
            "price": 10.0,
            "cost": 6.0,
            "stock_quantity": 10,
            "min_stock_level": 2,
        }
        data.update(overrides)
        return Product(**data)

    return _make


@pytest.fixture
def customer() -> CustomerInfo:
    return CustomerInfo(name="Budi Santoso", email="Budi@Example.com", phone="+62-811-000")


@pytest.fixture
def make_order(customer):
    """Factory for order entities with two lines: 2 x 10.00 and 1 x 5.00."""

    def _make(**overrides) -> Order:
        data = {
            "id": 1,
            "order_number": "ORD-20240501-001",
            "customer": customer,
            "items": [
                OrderLine(product_id=1, product_name="Widget", sku="WID-001", quantity=2, price=10.0),
                OrderLine(product_id=2, product_name="Gadget", sku="GAD-001", quantity=1, price=5.0),
            ],
            "payment_method": PaymentMethod.CASH,
            "created_by": 1,
        }
        data.update(overrides)
        return Order(**data)

    return _make
