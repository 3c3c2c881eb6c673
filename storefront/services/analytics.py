"""Sales aggregation for the admin dashboard."""

from __future__ import annotations

from datetime import date

from storefront.schemas.analytics import DailySales
from storefront.schemas.order import Order
from storefront.utils.time import day_label, ms_to_utc_date

SALES_WINDOW_DAYS: int = 7


def summarize_daily_sales(orders: list[Order], days: int = SALES_WINDOW_DAYS) -> list[DailySales]:
    """Return revenue per UTC day for the most recent days, oldest first.

    Cancelled orders are excluded from both the amount and the count.
    """
    buckets: dict[date, tuple[float, int]] = {}
    for order in orders:
        if order.status == "cancelled":
            continue
        day = ms_to_utc_date(order.timestamp)
        amount, count = buckets.get(day, (0.0, 0))
        buckets[day] = (amount + order.total_amount, count + 1)

    recent_days = sorted(buckets)[-days:] if days > 0 else []
    return [
        DailySales(date=day_label(day), amount=buckets[day][0], orders=buckets[day][1])
        for day in recent_days
    ]
