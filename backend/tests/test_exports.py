"""Tests for debt report and payment calendar exports (Excel + PDF)."""
from __future__ import annotations

import io
from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient
from openpyxl import load_workbook
from sqlalchemy.orm import Session

from backend.app.models.audit import AuditLog
from backend.app.models.order import Order
from backend.app.services.export_excel import export_month_schedule_excel
from backend.app.services.export_pdf import export_customer_debts_pdf
from backend.app.services.statistics import get_customer_debts, get_month_schedule

STATS = "/api/v1/statistics"
NOW = datetime(2024, 2, 10, 12, 0, tzinfo=ZoneInfo("UTC"))


# ── Excel exports ────────────────────────────────────────────────────────


def test_customer_debts_excel_returns_xlsx(
    client: TestClient, make_order: Callable[..., Order]
) -> None:
    make_order(customer_name="María Pérez", payments=["40"])
    resp = client.get(f"{STATS}/debts/export/excel")
    assert resp.status_code == 200
    assert "spreadsheetml" in resp.headers["content-type"]
    assert 'filename="customer-debts.xlsx"' in resp.headers["content-disposition"]
    # XLSX files are ZIP archives starting with PK
    assert resp.content[:2] == b"PK"

    ws = load_workbook(io.BytesIO(resp.content)).active
    assert ws.cell(row=1, column=1).value == "Deudas por Cliente"
    assert ws.cell(row=5, column=1).value == "María Pérez"


def test_calendar_excel_returns_xlsx(client: TestClient) -> None:
    resp = client.get(
        f"{STATS}/calendar/export/excel", params={"year": 2024, "month": 2}
    )
    assert resp.status_code == 200
    assert resp.content[:2] == b"PK"
    assert "payment-calendar-2024-02.xlsx" in resp.headers["content-disposition"]


def test_month_schedule_excel_marks_overdue_rows(
    db: Session, make_order: Callable[..., Order]
) -> None:
    make_order(customer_name="Luis", order_date=date(2024, 1, 20), sale_price="40")
    data = get_month_schedule(db, 2024, 2, now=NOW, lang="en")
    ws = load_workbook(export_month_schedule_excel(data, lang="en")).active

    assert ws.cell(row=1, column=1).value == "Pending Installments"
    assert ws.cell(row=4, column=1).value == "Date"
    # Day header, then its single event
    assert ws.cell(row=5, column=1).value == "2024-02-04"
    assert ws.cell(row=6, column=1).value == "First Installment"
    assert ws.cell(row=6, column=5).value == "Yes"
    assert ws.cell(row=8, column=5).value == "No"


# ── PDF exports ──────────────────────────────────────────────────────────


def test_customer_debts_pdf_returns_pdf(
    client: TestClient, make_order: Callable[..., Order]
) -> None:
    make_order(customer_name="José Rodríguez")
    resp = client.get(f"{STATS}/debts/export/pdf", params={"lang": "en"})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content[:5] == b"%PDF-"


def test_calendar_pdf_returns_pdf(
    client: TestClient, make_order: Callable[..., Order]
) -> None:
    make_order()
    resp = client.get(f"{STATS}/calendar/export/pdf")
    assert resp.status_code == 200
    assert resp.content[:5] == b"%PDF-"


def test_pdf_tolerates_characters_outside_latin1(
    db: Session, make_order: Callable[..., Order]
) -> None:
    make_order(customer_name="Zoë 😀 Łukasz", order_date=date(2024, 1, 1))
    buf = export_customer_debts_pdf(get_customer_debts(db, now=NOW), lang="es")
    assert buf.read(5) == b"%PDF-"


# ── Audit ────────────────────────────────────────────────────────────────


def test_export_is_audited(client: TestClient, db: Session) -> None:
    client.get(f"{STATS}/debts/export/pdf")
    log = db.query(AuditLog).filter(AuditLog.action == "REPORT_EXPORTED").one()
    assert log.resource_id == "customer-debts"
    assert log.changes == {"format": "pdf"}
