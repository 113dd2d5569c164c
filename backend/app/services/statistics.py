from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy.orm import Session

from backend.app.models.order import Order, OrderStatus
from backend.app.services.debts import (
    CalendarBuckets,
    CalendarEvent,
    CustomerDebt,
    build_debt_calendar,
    build_month_grid,
    local_now,
    pending_events,
    shift_month,
    to_date,
    to_money,
)
from backend.app.services.export_i18n import t
from backend.app.services.orders import load_orders_with_payments

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PERIODS = ("week", "month", "year")


# ─── Period statistics ────────────────────────────────────────────────────────


def period_start(period: str, today: date) -> date:
    """First day counted for a week/month/year look-back ending today."""
    if period == "week":
        return today - timedelta(days=7)
    if period == "month":
        year, month = shift_month(today.year, today.month, -1)
    elif period == "year":
        year, month = today.year - 1, today.month
    else:
        raise ValueError(f"period must be one of {PERIODS}")
    # Clamp the day, e.g. March 31 -> February 28
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def period_statistics(orders: Iterable[Order], period: str, today: date) -> dict:
    start = period_start(period, today)

    order_count = 0
    paid_orders = 0
    total_revenue = ZERO
    total_investment = ZERO
    total_profit = ZERO
    total_paid = ZERO

    for order in orders:
        if to_date(order.order_date) < start:
            continue
        order_count += 1
        if order.status == OrderStatus.PAID:
            paid_orders += 1
        total_revenue += to_money(order.sale_price)
        total_investment += to_money(order.purchase_price)
        total_profit += order.profit
        total_paid += order.total_paid

    margin = ZERO
    if total_revenue > ZERO:
        margin = (total_profit / total_revenue * HUNDRED).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )

    return {
        "period": period,
        "from_date": start.isoformat(),
        "to_date": today.isoformat(),
        "order_count": order_count,
        "paid_orders": paid_orders,
        "pending_orders": order_count - paid_orders,
        "total_revenue": str(total_revenue),
        "total_investment": str(total_investment),
        "total_profit": str(total_profit),
        "total_paid": str(total_paid),
        "receivable": str(total_revenue - total_paid),
        "profit_margin": str(margin),
    }


def get_period_statistics(
    db: Session, period: str, today: date | None = None, lang: str = "es"
) -> dict:
    today = today or local_now().date()
    stats = period_statistics(load_orders_with_payments(db), period, today)
    stats["period_label"] = t(lang, f"period_{period}")
    return stats


# ─── Debt report and calendar ─────────────────────────────────────────────────


def _debt_to_dict(debt: CustomerDebt) -> dict:
    return {
        "customer_name": debt.customer_name,
        "total_due": str(debt.total_due),
        "earliest_due_date": debt.earliest_due_date.isoformat()
        if debt.earliest_due_date
        else None,
        "orders_pending": [
            {
                "id": str(o.id),
                "order_date": o.order_date.isoformat(),
                "remaining": str(o.remaining),
                "first_due": o.first_due.isoformat(),
                "second_due": o.second_due.isoformat(),
                "is_fully_paid": o.is_fully_paid,
            }
            for o in debt.orders_pending
        ],
    }


def _event_to_dict(event: CalendarEvent, lang: str) -> dict:
    return {
        "date": event.date.isoformat(),
        "customer_name": event.customer_name,
        "kind": event.kind.value,
        "kind_label": t(lang, event.kind.value),
        "order_id": str(event.order_id),
        "amount_remaining": str(event.amount_remaining),
        "is_overdue": event.is_overdue,
        "original_order_date": event.original_order_date.isoformat(),
    }


def _load_calendar(
    db: Session, now: datetime | None
) -> tuple[datetime, list[CustomerDebt], CalendarBuckets]:
    now = now or local_now()
    debts, buckets = build_debt_calendar(load_orders_with_payments(db), now)
    return now, debts, buckets


def get_customer_debts(db: Session, now: datetime | None = None) -> dict:
    now, debts, _ = _load_calendar(db, now)
    total_due = sum((d.total_due for d in debts), ZERO)
    return {
        "as_of": now.isoformat(timespec="seconds"),
        "total_due": str(total_due),
        "customer_count": len(debts),
        "customers": [_debt_to_dict(d) for d in debts],
    }


def get_day_detail(
    db: Session, day: date, now: datetime | None = None, lang: str = "es"
) -> dict:
    _, _, buckets = _load_calendar(db, now)
    bucket = buckets[day]
    return {
        "date": day.isoformat(),
        "total_due_today": str(bucket.total_due_today),
        "events": [_event_to_dict(e, lang) for e in pending_events(bucket)],
    }


def get_calendar_month(
    db: Session,
    year: int | None = None,
    month: int | None = None,
    now: datetime | None = None,
    lang: str = "es",
) -> dict:
    now, _, buckets = _load_calendar(db, now)
    today = now.date()
    year = year or today.year
    month = month or today.month
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")

    cells = build_month_grid(year, month, buckets, today)
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)

    month_total = sum(
        (c.total_due for c in cells if c.is_current_month), ZERO
    )

    return {
        "year": year,
        "month": month,
        "title": f"{t(lang, f'month_{month}')} {year}".upper(),
        "weekdays": [t(lang, f"weekday_{i}") for i in range(7)],
        "previous": {"year": prev_year, "month": prev_month},
        "next": {"year": next_year, "month": next_month},
        "month_total_due": str(month_total),
        "days": [
            {
                "date": c.date.isoformat(),
                "day": c.date.day,
                "is_current_month": c.is_current_month,
                "is_today": c.is_today,
                "event_count": c.event_count,
                "total_due": str(c.total_due),
                "has_overdue": c.has_overdue,
            }
            for c in cells
        ],
    }


def get_month_schedule(
    db: Session,
    year: int,
    month: int,
    now: datetime | None = None,
    lang: str = "es",
) -> dict:
    """Every day of one month that has installments due, in date order."""
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    _, _, buckets = _load_calendar(db, now)

    days = []
    total = ZERO
    for day in sorted(buckets):
        if (day.year, day.month) != (year, month):
            continue
        bucket = buckets[day]
        total += bucket.total_due_today
        days.append(
            {
                "date": day.isoformat(),
                "total_due_today": str(bucket.total_due_today),
                "events": [_event_to_dict(e, lang) for e in pending_events(bucket)],
            }
        )

    return {
        "year": year,
        "month": month,
        "title": f"{t(lang, f'month_{month}')} {year}",
        "total_due": str(total),
        "days": days,
    }
