"""Excel export functions for debt reports using openpyxl."""
from __future__ import annotations

import io
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from backend.app.services.export_i18n import t

# ── Shared styling constants ────────────────────────────────────────────────

_HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
_HEADER_FILL = PatternFill(start_color="334155", end_color="334155", fill_type="solid")
_SECTION_FONT = Font(name="Calibri", bold=True, size=11)
_OVERDUE_FILL = PatternFill(start_color="FEE2E2", end_color="FEE2E2", fill_type="solid")
_TOTAL_FONT = Font(name="Calibri", bold=True, size=11)
_TOTAL_BORDER = Border(
    top=Side(style="thin"),
    bottom=Side(style="double"),
)
_CURRENCY_FMT = '#,##0.00'
_RIGHT = Alignment(horizontal="right")
_LEFT = Alignment(horizontal="left")


def _auto_width(ws: Any) -> None:
    """Auto-fit column widths based on content."""
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        col_letter = get_column_letter(col_idx)
        for row in ws.iter_rows(min_col=col_idx, max_col=col_idx, values_only=False):
            cell = row[0]
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 4, 40)


def _write_header_row(ws: Any, row: int, values: list[str]) -> None:
    """Write a styled header row."""
    for col, val in enumerate(values, 1):
        cell = ws.cell(row=row, column=col, value=val)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _RIGHT if col > 1 else _LEFT


def _write_title(ws: Any, title: str, subtitle: str) -> int:
    """Write report title and subtitle, return next available row."""
    ws.cell(row=1, column=1, value=title).font = Font(name="Calibri", bold=True, size=14)
    ws.cell(row=2, column=1, value=subtitle).font = Font(name="Calibri", size=10, italic=True)
    return 4


def _money_cell(ws: Any, row: int, col: int, value: str, bold: bool = False) -> Any:
    c = ws.cell(row=row, column=col, value=float(value))
    c.number_format = _CURRENCY_FMT
    c.alignment = _RIGHT
    if bold:
        c.font = _TOTAL_FONT
        c.border = _TOTAL_BORDER
    return c


def _to_workbook(ws: Any, wb: Workbook) -> io.BytesIO:
    """Finalize workbook and return as BytesIO."""
    _auto_width(ws)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


# ── 1. Customer Debts ──────────────────────────────────────────────────────


def export_customer_debts_excel(data: dict[str, Any], lang: str = "es") -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = t(lang, "customer_debts")[:31]

    row = _write_title(ws, t(lang, "customer_debts"), f"{t(lang, 'generated')}: {data['as_of']}")

    _write_header_row(ws, row, [
        t(lang, "customer"),
        t(lang, "order_date"),
        t(lang, "first_due"),
        t(lang, "second_due"),
        t(lang, "remaining"),
    ])
    row += 1

    for cust in data.get("customers", []):
        ws.cell(row=row, column=1, value=cust["customer_name"]).font = _SECTION_FONT
        ws.cell(row=row, column=2, value=t(lang, "earliest_due_date"))
        ws.cell(row=row, column=3, value=cust["earliest_due_date"] or "")
        _money_cell(ws, row, 5, cust["total_due"]).font = _SECTION_FONT
        row += 1
        for order in cust["orders_pending"]:
            ws.cell(row=row, column=2, value=order["order_date"]).alignment = _RIGHT
            ws.cell(row=row, column=3, value=order["first_due"]).alignment = _RIGHT
            ws.cell(row=row, column=4, value=order["second_due"]).alignment = _RIGHT
            _money_cell(ws, row, 5, order["remaining"])
            row += 1

    ws.cell(row=row, column=1, value=t(lang, "total")).font = _TOTAL_FONT
    _money_cell(ws, row, 5, data.get("total_due", "0"), bold=True)

    return _to_workbook(ws, wb)


# ── 2. Monthly Payment Calendar ─────────────────────────────────────────────


def export_month_schedule_excel(data: dict[str, Any], lang: str = "es") -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = t(lang, "events")

    row = _write_title(ws, t(lang, "payment_calendar"), data["title"])

    _write_header_row(ws, row, [
        t(lang, "date"),
        t(lang, "customer"),
        t(lang, "order_date"),
        t(lang, "remaining"),
        t(lang, "overdue"),
    ])
    row += 1

    for day in data.get("days", []):
        ws.cell(row=row, column=1, value=day["date"]).font = _SECTION_FONT
        ws.cell(row=row, column=2, value=t(lang, "total_due_today"))
        _money_cell(ws, row, 4, day["total_due_today"]).font = _SECTION_FONT
        row += 1
        for event in day["events"]:
            ws.cell(row=row, column=1, value=event["kind_label"])
            ws.cell(row=row, column=2, value=event["customer_name"])
            ws.cell(row=row, column=3, value=event["original_order_date"]).alignment = _RIGHT
            _money_cell(ws, row, 4, event["amount_remaining"])
            c = ws.cell(
                row=row,
                column=5,
                value=t(lang, "yes") if event["is_overdue"] else t(lang, "no"),
            )
            c.alignment = _RIGHT
            if event["is_overdue"]:
                for col in range(1, 6):
                    ws.cell(row=row, column=col).fill = _OVERDUE_FILL
            row += 1

    ws.cell(row=row, column=1, value=t(lang, "total")).font = _TOTAL_FONT
    _money_cell(ws, row, 4, data.get("total_due", "0"), bold=True)

    return _to_workbook(ws, wb)
