"""Tests for period statistics, the customer debt report and the calendar."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.models.order import Order
from backend.app.services.statistics import (
    get_calendar_month,
    get_customer_debts,
    get_day_detail,
    get_month_schedule,
    period_start,
    period_statistics,
)

STATS = "/api/v1/statistics"
NOW = datetime(2024, 2, 10, 12, 0, tzinfo=ZoneInfo("UTC"))


# ─── Period statistics ────────────────────────────────────────────────────────


class TestPeriodStart:
    def test_week(self) -> None:
        assert period_start("week", date(2024, 3, 5)) == date(2024, 2, 27)

    def test_month_clamps_day(self) -> None:
        assert period_start("month", date(2024, 3, 31)) == date(2024, 2, 29)
        assert period_start("month", date(2024, 1, 15)) == date(2023, 12, 15)

    def test_year_from_leap_day(self) -> None:
        assert period_start("year", date(2024, 2, 29)) == date(2023, 2, 28)

    def test_unknown_period(self) -> None:
        with pytest.raises(ValueError, match="period"):
            period_start("decade", date(2024, 1, 1))


class TestPeriodStatistics:
    @pytest.fixture()
    def orders(self, make_order: Callable[..., Order], today: date) -> list[Order]:
        return [
            make_order(sale_price="100", purchase_price="60", order_date=today, payments=["40"]),
            make_order(
                sale_price="50",
                purchase_price="60",
                order_date=today - timedelta(days=3),
                payments=["50"],
            ),
            make_order(
                sale_price="80",
                purchase_price="30",
                order_date=today - timedelta(days=60),
            ),
        ]

    def test_week(self, orders: list[Order], today: date) -> None:
        stats = period_statistics(orders, "week", today)
        assert stats["order_count"] == 2
        assert stats["paid_orders"] == 1
        assert stats["pending_orders"] == 1
        assert Decimal(stats["total_revenue"]) == Decimal("150")
        assert Decimal(stats["total_investment"]) == Decimal("120")
        assert Decimal(stats["total_profit"]) == Decimal("30")
        assert Decimal(stats["total_paid"]) == Decimal("90")
        assert Decimal(stats["receivable"]) == Decimal("60")
        assert stats["profit_margin"] == "20.0"

    def test_year_includes_older_orders(self, orders: list[Order], today: date) -> None:
        stats = period_statistics(orders, "year", today)
        assert stats["order_count"] == 3
        assert Decimal(stats["total_profit"]) == Decimal("80")

    def test_no_revenue_means_zero_margin(self, today: date) -> None:
        stats = period_statistics([], "month", today)
        assert stats["order_count"] == 0
        assert stats["profit_margin"] == "0"

    def test_endpoint(self, client: TestClient, orders: list[Order]) -> None:
        resp = client.get(f"{STATS}/summary", params={"period": "week"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["order_count"] == 2
        assert body["period_label"] == "Última Semana"

        assert client.get(f"{STATS}/summary", params={"period": "decade"}).status_code == 422


# ─── Debts and calendar ───────────────────────────────────────────────────────


class TestCustomerDebtReport:
    def test_report(self, db: Session, make_order: Callable[..., Order]) -> None:
        make_order(customer_name="Luis", order_date=date(2024, 2, 1), sale_price="50")
        make_order(
            customer_name="Ana",
            order_date=date(2024, 1, 1),
            sale_price="100",
            payments=["40"],
        )
        make_order(customer_name="Eva", order_date=date(2024, 1, 1), payments=["100"])

        report = get_customer_debts(db, now=NOW)
        assert report["customer_count"] == 2
        assert Decimal(report["total_due"]) == Decimal("110")
        ana, luis = report["customers"]
        assert ana["customer_name"] == "Ana"
        assert ana["earliest_due_date"] == "2024-01-31"
        assert ana["orders_pending"][0]["first_due"] == "2024-01-16"
        assert luis["earliest_due_date"] == "2024-02-16"


class TestCalendar:
    def test_day_detail(self, db: Session, make_order: Callable[..., Order]) -> None:
        make_order(order_date=date(2024, 1, 1), sale_price="100", payments=["40"])

        detail = get_day_detail(db, date(2024, 1, 16), now=NOW)
        assert Decimal(detail["total_due_today"]) == Decimal("30")
        (event,) = detail["events"]
        assert event["kind"] == "first_due"
        assert event["kind_label"] == "Primer Abono"
        assert event["is_overdue"] is True
        assert event["original_order_date"] == "2024-01-01"

        second = get_day_detail(db, date(2024, 1, 31), now=NOW, lang="en")
        assert second["events"][0]["kind_label"] == "Second Installment"

    def test_empty_day(self, db: Session) -> None:
        detail = get_day_detail(db, date(2024, 1, 16), now=NOW)
        assert detail["events"] == []
        assert Decimal(detail["total_due_today"]) == Decimal("0")

    def test_month_grid(self, db: Session, make_order: Callable[..., Order]) -> None:
        make_order(order_date=date(2024, 1, 1), sale_price="100", payments=["40"])

        month = get_calendar_month(db, 2024, 1, now=NOW)
        assert month["title"] == "ENERO 2024"
        assert month["weekdays"][0] == "Lun"
        assert month["previous"] == {"year": 2023, "month": 12}
        assert month["next"] == {"year": 2024, "month": 2}
        assert len(month["days"]) == 42
        # 2024-01-01 is a Monday, so the grid starts on it
        assert month["days"][0]["date"] == "2024-01-01"
        assert Decimal(month["month_total_due"]) == Decimal("60")

        cells = {d["date"]: d for d in month["days"]}
        assert cells["2024-01-16"]["event_count"] == 1
        assert cells["2024-01-16"]["has_overdue"] is True

    def test_month_out_of_range(self, db: Session) -> None:
        with pytest.raises(ValueError, match="month"):
            get_calendar_month(db, 2024, 13, now=NOW)

    def test_month_schedule(self, db: Session, make_order: Callable[..., Order]) -> None:
        make_order(customer_name="Ana", order_date=date(2024, 1, 1), sale_price="100")
        make_order(customer_name="Luis", order_date=date(2024, 1, 20), sale_price="40")

        schedule = get_month_schedule(db, 2024, 2, now=NOW)
        # Ana's checkpoints fall in January, Luis's on 02-04 and 02-19
        assert [d["date"] for d in schedule["days"]] == ["2024-02-04", "2024-02-19"]
        assert Decimal(schedule["total_due"]) == Decimal("40")

    def test_calendar_endpoints(
        self, client: TestClient, make_order: Callable[..., Order], today: date
    ) -> None:
        make_order(order_date=today, sale_price="100")
        due = today + timedelta(days=15)

        resp = client.get(
            f"{STATS}/calendar",
            params={"year": due.year, "month": due.month, "lang": "en"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["weekdays"][0] == "Mon"
        cells = {d["date"]: d for d in body["days"]}
        assert cells[due.isoformat()]["event_count"] == 1
        assert cells[due.isoformat()]["has_overdue"] is False

        day = client.get(f"{STATS}/calendar/{due.isoformat()}").json()
        assert Decimal(day["total_due_today"]) == Decimal("50")

        assert client.get(f"{STATS}/calendar", params={"month": 13}).status_code == 422
