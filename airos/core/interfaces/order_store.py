"""Abstract interfaces for order and order-number storage."""

from abc import ABC, abstractmethod
from datetime import date, datetime

from airos.core.entities.order import Order, OrderStatus
from airos.core.entities.stats import DailyTotals, StatusCount


class IOrderStore(ABC):
    """Interface for order persistence (order rows own their items)."""

    @abstractmethod
    async def create_order(self, order: Order) -> Order:
        """Insert an order with its items, keeping the order's `created_at`."""
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> Order | None:
        """Get order by ID with items."""
        pass

    @abstractmethod
    async def update_order(
        self, order: Order, expected_status: OrderStatus | None = None
    ) -> Order:
        """
        Persist every field of the order, replacing its items.

        With `expected_status`, the write only applies while the stored
        status still equals it; otherwise ConflictError is raised.
        """
        pass

    @abstractmethod
    async def delete_order(
        self, order_id: int, expected_status: OrderStatus | None = None
    ) -> bool:
        """
        Delete an order and its items; False when it does not exist.

        With `expected_status`, the delete only applies while the stored
        status still equals it; otherwise ConflictError is raised.
        """
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: OrderStatus | None = None,
        search: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first."""
        pass

    @abstractmethod
    async def count_orders(
        self,
        statuses: list[OrderStatus] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        search: str | None = None,
    ) -> int:
        """Count orders created in [start, end) with one of `statuses`."""
        pass

    @abstractmethod
    async def sum_revenue(
        self,
        statuses: list[OrderStatus] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> float:
        """Sum of order totals matching the filter."""
        pass

    @abstractmethod
    async def count_by_status(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[StatusCount]:
        """Order count per status."""
        pass

    @abstractmethod
    async def daily_totals(
        self,
        statuses: list[OrderStatus] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[DailyTotals]:
        """Order count and revenue per creation day, oldest first."""
        pass

    @abstractmethod
    async def count_distinct_customers(self) -> int:
        """Number of distinct customer emails across all orders."""
        pass


class ISequenceStore(ABC):
    """Per-day order-number counter."""

    @abstractmethod
    async def next_value(self, day: date) -> int:
        """
        Atomically advance and return the counter for `day`.

        The first value of a day continues from the number of orders
        already created that day.
        """
        pass
