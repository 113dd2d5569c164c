from __future__ import annotations

from pydantic import BaseModel


class PeriodStatistics(BaseModel):
    period: str
    period_label: str
    from_date: str
    to_date: str
    order_count: int
    paid_orders: int
    pending_orders: int
    total_revenue: str
    total_investment: str
    total_profit: str
    total_paid: str
    receivable: str
    profit_margin: str


class PendingOrderOut(BaseModel):
    id: str
    order_date: str
    remaining: str
    first_due: str
    second_due: str
    is_fully_paid: bool


class CustomerDebtOut(BaseModel):
    customer_name: str
    total_due: str
    earliest_due_date: str | None
    orders_pending: list[PendingOrderOut]


class CustomerDebtsReport(BaseModel):
    as_of: str
    total_due: str
    customer_count: int
    customers: list[CustomerDebtOut]


class CalendarEventOut(BaseModel):
    date: str
    customer_name: str
    kind: str
    kind_label: str
    order_id: str
    amount_remaining: str
    is_overdue: bool
    original_order_date: str


class DayDetail(BaseModel):
    date: str
    total_due_today: str
    events: list[CalendarEventOut]


class MonthRef(BaseModel):
    year: int
    month: int


class CalendarCellOut(BaseModel):
    date: str
    day: int
    is_current_month: bool
    is_today: bool
    event_count: int
    total_due: str
    has_overdue: bool


class CalendarMonth(BaseModel):
    year: int
    month: int
    title: str
    weekdays: list[str]
    previous: MonthRef
    next: MonthRef
    month_total_due: str
    days: list[CalendarCellOut]
