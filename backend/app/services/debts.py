"""Customer debt aggregation and the payment-due calendar.

Everything in this module is a pure, in-memory transformation over orders that
were already loaded together with their payments.  Nothing is persisted: the
debt summary and the calendar are rebuilt from scratch every time the caller
passes a fresh order list.

Each unpaid order has two follow-up checkpoints, ``FIRST_DUE_DAYS`` and
``SECOND_DUE_DAYS`` after its order date (15 and 30 by default).  Due dates are
calendar dates; whenever one is compared with "now" it is taken to start at
local midnight in ``settings.TIMEZONE``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any
from zoneinfo import ZoneInfo

from backend.app.core.config import settings

ZERO = Decimal("0")
TWO = Decimal("2")
GRID_CELLS = 42  # 6 weeks x 7 days


class EventKind(str, enum.Enum):
    FIRST_DUE = "first_due"
    SECOND_DUE = "second_due"


@dataclass(frozen=True)
class OrderDebtDetails:
    id: Any
    order_date: date
    remaining: Decimal
    first_due: date
    second_due: date
    is_fully_paid: bool = False


@dataclass
class CustomerDebt:
    customer_name: str
    total_due: Decimal = ZERO
    earliest_due_date: date | None = None
    orders_pending: list[OrderDebtDetails] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarEvent:
    date: date
    customer_name: str
    kind: EventKind
    order_id: Any
    amount_remaining: Decimal
    is_overdue: bool
    original_order_date: date


@dataclass
class DailyBucket:
    date: date
    events: list[CalendarEvent] = field(default_factory=list)
    total_due_today: Decimal = ZERO


class CalendarBuckets(dict):
    """Day -> DailyBucket mapping; an absent day reads as an empty bucket."""

    def __missing__(self, key: date) -> DailyBucket:
        return DailyBucket(date=key)


@dataclass(frozen=True)
class CalendarCell:
    date: date
    is_current_month: bool
    is_today: bool
    event_count: int
    total_due: Decimal
    has_overdue: bool


# ─── Boundary helpers ─────────────────────────────────────────────────────────


def to_money(value: Any) -> Decimal:
    """Coerce a stored amount to Decimal; anything unparseable counts as 0."""
    if value is None:
        return ZERO
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO


def to_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    return datetime.now(local_tz())


def _aware(now: datetime | None) -> datetime:
    if now is None:
        return local_now()
    if now.tzinfo is None:
        return now.replace(tzinfo=local_tz())
    return now


def _start_of_day(day: date, now: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


# ─── Calculators ──────────────────────────────────────────────────────────────


def remaining_balance(sale_price: Any, payment_amounts: Iterable[Any]) -> Decimal:
    """Outstanding amount of an order, never negative."""
    paid = sum((to_money(a) for a in payment_amounts), ZERO)
    return max(ZERO, to_money(sale_price) - paid)


def due_dates(
    order_date: date,
    first_days: int | None = None,
    second_days: int | None = None,
) -> tuple[date, date]:
    """Return ``(first_due, second_due)`` for an order date."""
    if first_days is None:
        first_days = settings.FIRST_DUE_DAYS
    if second_days is None:
        second_days = settings.SECOND_DUE_DAYS
    return (
        order_date + timedelta(days=first_days),
        order_date + timedelta(days=second_days),
    )


def next_due_date(first_due: date, second_due: date, now: datetime | None = None) -> date:
    """The checkpoint a collector should look at next.

    The first checkpoint while it is still ahead, otherwise the second one,
    whether or not that has passed too.
    """
    now = _aware(now)
    if _start_of_day(first_due, now) > now:
        return first_due
    return second_due


def is_overdue(due: date, now: datetime | None = None) -> bool:
    now = _aware(now)
    return _start_of_day(due, now) < now


# ─── Aggregation ──────────────────────────────────────────────────────────────


def aggregate_customer_debts(
    orders: Iterable[Any], now: datetime | None = None
) -> list[CustomerDebt]:
    """Group outstanding balances by customer, soonest due date first.

    ``orders`` are records exposing ``id``, ``order_date``, ``customer_name``,
    ``sale_price`` and ``payments`` (each with an ``amount``).  Customers
    without a due date sort last; ties keep first-seen order.
    """
    now = _aware(now)
    debt_map: dict[str, CustomerDebt] = {}

    for order in orders:
        remaining = remaining_balance(
            order.sale_price, (p.amount for p in order.payments)
        )
        if remaining <= ZERO:
            continue

        order_date = to_date(order.order_date)
        first_due, second_due = due_dates(order_date)

        debt = debt_map.get(order.customer_name)
        if debt is None:
            debt = CustomerDebt(customer_name=order.customer_name)
            debt_map[order.customer_name] = debt

        debt.total_due += remaining

        upcoming = next_due_date(first_due, second_due, now)
        if debt.earliest_due_date is None or upcoming < debt.earliest_due_date:
            debt.earliest_due_date = upcoming

        debt.orders_pending.append(
            OrderDebtDetails(
                id=order.id,
                order_date=order_date,
                remaining=remaining,
                first_due=first_due,
                second_due=second_due,
            )
        )

    return sorted(
        debt_map.values(),
        key=lambda d: (d.earliest_due_date is None, d.earliest_due_date or date.min),
    )


def expand_calendar_events(
    debts: Iterable[CustomerDebt], now: datetime | None = None
) -> list[CalendarEvent]:
    """Two events per pending order, each carrying the order's full remaining."""
    now = _aware(now)
    events: list[CalendarEvent] = []
    for debt in debts:
        for order in debt.orders_pending:
            if order.remaining <= ZERO:
                continue
            for kind, due in (
                (EventKind.FIRST_DUE, order.first_due),
                (EventKind.SECOND_DUE, order.second_due),
            ):
                events.append(
                    CalendarEvent(
                        date=due,
                        customer_name=debt.customer_name,
                        kind=kind,
                        order_id=order.id,
                        amount_remaining=order.remaining,
                        is_overdue=is_overdue(due, now),
                        original_order_date=order.order_date,
                    )
                )
    return events


def bucket_events_by_day(events: Iterable[CalendarEvent]) -> CalendarBuckets:
    """Group events per calendar day.

    A day's total adds half of each event's remaining amount: every order
    shows up twice, once per checkpoint, and its balance must be counted once.
    """
    buckets = CalendarBuckets()
    for event in events:
        if event.amount_remaining <= ZERO:
            continue
        bucket = buckets.get(event.date)
        if bucket is None:
            bucket = DailyBucket(date=event.date)
            buckets[event.date] = bucket
        bucket.events.append(event)
        bucket.total_due_today += event.amount_remaining / TWO
    return buckets


def build_debt_calendar(
    orders: Iterable[Any], now: datetime | None = None
) -> tuple[list[CustomerDebt], CalendarBuckets]:
    """Debt summary plus day buckets, computed once for the same ``now``."""
    now = _aware(now)
    debts = aggregate_customer_debts(orders, now)
    return debts, bucket_events_by_day(expand_calendar_events(debts, now))


# ─── Month grid ───────────────────────────────────────────────────────────────


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month_grid(
    year: int, month: int, buckets: CalendarBuckets, today: date
) -> list[CalendarCell]:
    """A Monday-first 6x7 grid padded with the neighbouring months' days."""
    first = date(year, month, 1)
    start = first - timedelta(days=first.weekday())

    cells: list[CalendarCell] = []
    for offset in range(GRID_CELLS):
        day = start + timedelta(days=offset)
        bucket = buckets[day]
        cells.append(
            CalendarCell(
                date=day,
                is_current_month=(day.year, day.month) == (year, month),
                is_today=day == today,
                event_count=len(bucket.events),
                total_due=bucket.total_due_today,
                has_overdue=any(e.is_overdue for e in bucket.events),
            )
        )
    return cells


def pending_events(bucket: DailyBucket) -> Sequence[CalendarEvent]:
    return [e for e in bucket.events if e.amount_remaining > ZERO]
