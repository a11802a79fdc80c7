"""Dashboard and reporting aggregates."""

from datetime import date, datetime, timedelta

from airos.application.dto.mappers import supplier_to_response
from airos.application.dto.responses import (
    DailyTotalsResponse,
    DashboardStatsResponse,
    OrderStatsResponse,
    RatingCountResponse,
    SalesChartPointResponse,
    SalesChartResponse,
    StatusCountResponse,
    SupplierStatsResponse,
)
from airos.config import get_logger
from airos.core.entities.order import OrderStatus
from airos.core.interfaces.order_store import IOrderStore
from airos.core.interfaces.product_store import IProductStore
from airos.core.interfaces.supplier_store import ISupplierStore
from airos.core.interfaces.user_store import IUserStore
from airos.core.time_utils import day_bounds, month_start, utcnow

logger = get_logger(__name__)

# Only delivered orders count as revenue.
REVENUE_STATUSES = [OrderStatus.DELIVERED]


def revenue_trend(this_month: float, last_month: float) -> float:
    """Month-over-month change in percent, one decimal; 0 without a baseline."""
    if last_month <= 0:
        return 0.0
    return round((this_month - last_month) / last_month * 100, 1)


class DashboardStatsUseCase:
    """Read-only aggregates over users, products, orders and suppliers."""

    def __init__(
        self,
        user_store: IUserStore | None = None,
        product_store: IProductStore | None = None,
        order_store: IOrderStore | None = None,
        supplier_store: ISupplierStore | None = None,
    ):
        self._user_store = user_store
        self._product_store = product_store
        self._order_store = order_store
        self._supplier_store = supplier_store

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from airos.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

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

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from airos.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def execute(self, now: datetime | None = None) -> DashboardStatsResponse:
        """Headline dashboard figures."""
        now = now or utcnow()
        this_month = month_start(now)
        last_month = month_start(now, months_back=1)

        orders = await self._get_order_store()
        products = await self._get_product_store()

        total_orders = await orders.count_orders()
        completed = await orders.count_orders(REVENUE_STATUSES)
        monthly = await orders.sum_revenue(REVENUE_STATUSES, start=this_month)
        previous = await orders.sum_revenue(REVENUE_STATUSES, start=last_month, end=this_month)
        all_order_value = await orders.sum_revenue()

        stats = DashboardStatsResponse(
            total_users=await (await self._get_user_store()).count_users(),
            total_products=await products.count_products(),
            total_orders=total_orders,
            total_suppliers=await (await self._get_supplier_store()).count_suppliers(),
            total_revenue=round(await orders.sum_revenue(REVENUE_STATUSES), 2),
            monthly_revenue=round(monthly, 2),
            last_month_revenue=round(previous, 2),
            revenue_trend=revenue_trend(monthly, previous),
            pending_orders=await orders.count_orders([OrderStatus.PENDING]),
            completed_orders=completed,
            low_stock_products=await products.count_products(low_stock=True),
            total_customers=await orders.count_distinct_customers(),
            fulfillment_rate=round(completed / total_orders * 100) if total_orders else 0,
            avg_order_value=round(all_order_value / total_orders, 2) if total_orders else 0.0,
        )
        logger.debug("dashboard_stats_computed", total_orders=total_orders)
        return stats

    async def sales_chart(self, days: int = 30, today: date | None = None) -> SalesChartResponse:
        """Delivered revenue per day for the last `days` days, oldest first."""
        today = today or utcnow().date()
        first_day = today - timedelta(days=days - 1)
        start, _ = day_bounds(first_day)
        _, end = day_bounds(today)

        totals = {
            row.day: row
            for row in await (await self._get_order_store()).daily_totals(
                REVENUE_STATUSES, start=start, end=end
            )
        }
        points = []
        for offset in range(days):
            key = (first_day + timedelta(days=offset)).isoformat()
            row = totals.get(key)
            points.append(
                SalesChartPointResponse(
                    day=key,
                    revenue=round(row.revenue, 2) if row else 0.0,
                    orders=row.count if row else 0,
                )
            )
        return SalesChartResponse(days=days, points=points)

    async def order_stats(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> OrderStatsResponse:
        """Order counts and revenue for an optional creation window."""
        orders = await self._get_order_store()
        return OrderStatsResponse(
            total_orders=await orders.count_orders(start=start, end=end),
            total_revenue=round(await orders.sum_revenue(start=start, end=end), 2),
            by_status=[
                StatusCountResponse(status=row.status, count=row.count)
                for row in await orders.count_by_status(start=start, end=end)
            ],
            daily=[
                DailyTotalsResponse(day=row.day, count=row.count, revenue=round(row.revenue, 2))
                for row in await orders.daily_totals(start=start, end=end)
            ],
        )

    async def supplier_stats(self) -> SupplierStatsResponse:
        """Supplier totals, credit exposure and the five largest balances."""
        suppliers = await self._get_supplier_store()
        credit_limit, balance = await suppliers.credit_totals()
        return SupplierStatsResponse(
            total_suppliers=await suppliers.count_suppliers(),
            active_suppliers=await suppliers.count_suppliers(is_active=True),
            total_credit_limit=round(credit_limit, 2),
            total_balance=round(balance, 2),
            by_rating=[
                RatingCountResponse(rating=row.rating, count=row.count)
                for row in await suppliers.count_by_rating()
            ],
            top_by_balance=[
                supplier_to_response(s) for s in await suppliers.top_by_balance(limit=5)
            ],
        )
