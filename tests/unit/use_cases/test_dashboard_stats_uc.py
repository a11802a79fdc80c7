"""Tests for DashboardStatsUseCase."""

from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest

from airos.application.use_cases import DashboardStatsUseCase
from airos.application.use_cases.dashboard_stats import revenue_trend
from airos.core.entities.order import OrderStatus
from airos.core.entities.stats import DailyTotals


@pytest.fixture
def stores():
    users, products, orders, suppliers = AsyncMock(), AsyncMock(), AsyncMock(), AsyncMock()
    users.count_users.return_value = 3
    products.count_products.side_effect = lambda low_stock=False, **_: 2 if low_stock else 12
    suppliers.count_suppliers.return_value = 4
    orders.count_distinct_customers.return_value = 6

    async def count_orders(statuses=None, start=None, end=None, search=None):
        if statuses == [OrderStatus.DELIVERED]:
            return 3
        if statuses == [OrderStatus.PENDING]:
            return 2
        return 8

    async def sum_revenue(statuses=None, start=None, end=None):
        if statuses is None:
            return 1000.0
        if end is not None:
            return 200.0  # last month
        if start is not None:
            return 250.0  # this month
        return 600.0

    orders.count_orders.side_effect = count_orders
    orders.sum_revenue.side_effect = sum_revenue
    return users, products, orders, suppliers


@pytest.fixture
def use_case(stores):
    users, products, orders, suppliers = stores
    return DashboardStatsUseCase(
        user_store=users, product_store=products, order_store=orders, supplier_store=suppliers
    )


class TestRevenueTrend:
    def test_growth(self):
        assert revenue_trend(250.0, 200.0) == 25.0

    def test_no_baseline(self):
        assert revenue_trend(250.0, 0.0) == 0.0

    def test_rounded(self):
        assert revenue_trend(100.0, 300.0) == -66.7


class TestDashboardStats:
    async def test_headline_figures(self, use_case):
        stats = await use_case.execute(now=datetime(2024, 5, 15, 12, 0))

        assert stats.total_users == 3
        assert stats.total_products == 12
        assert stats.low_stock_products == 2
        assert stats.total_orders == 8
        assert stats.completed_orders == 3
        assert stats.pending_orders == 2
        assert stats.total_revenue == 600.0
        assert stats.monthly_revenue == 250.0
        assert stats.last_month_revenue == 200.0
        assert stats.revenue_trend == 25.0
        assert stats.fulfillment_rate == 38
        assert stats.avg_order_value == 125.0
        assert stats.total_customers == 6

    async def test_month_windows(self, use_case, stores):
        _, _, orders, _ = stores
        await use_case.execute(now=datetime(2024, 1, 10))
        windows = [
            (c.kwargs.get("start"), c.kwargs.get("end")) for c in orders.sum_revenue.call_args_list
        ]
        assert (datetime(2024, 1, 1), None) in windows
        assert (datetime(2023, 12, 1), datetime(2024, 1, 1)) in windows


class TestSalesChart:
    async def test_fills_missing_days(self, use_case, stores):
        _, _, orders, _ = stores
        orders.daily_totals.return_value = [
            DailyTotals(day="2024-05-02", count=2, revenue=40.0),
        ]

        chart = await use_case.sales_chart(days=3, today=date(2024, 5, 3))

        assert [p.day for p in chart.points] == ["2024-05-01", "2024-05-02", "2024-05-03"]
        assert [p.revenue for p in chart.points] == [0.0, 40.0, 0.0]
        assert [p.orders for p in chart.points] == [0, 2, 0]
        kwargs = orders.daily_totals.call_args.kwargs
        assert kwargs["start"] == datetime(2024, 5, 1)
        assert kwargs["end"] == datetime(2024, 5, 4)
