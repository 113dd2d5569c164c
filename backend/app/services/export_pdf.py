"""PDF export functions for debt reports using fpdf2."""
from __future__ import annotations

import io
from typing import Any

from fpdf import FPDF

from backend.app.services.export_i18n import t


# ── Shared helpers ──────────────────────────────────────────────────────────

_COL_BG = (51, 65, 85)     # slate header
_SEC_BG = (226, 232, 240)  # light slate section
_OVERDUE_TEXT = (185, 28, 28)
_LINE_H = 7
_FONT = "Helvetica"


def _new_pdf(title: str, subtitle: str) -> FPDF:
    """Create a portrait PDF with title and subtitle."""
    pdf = FPDF()
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_font(_FONT, "B", 16)
    pdf.cell(0, 10, _safe_text(title), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font(_FONT, "", 9)
    pdf.cell(0, 6, _safe_text(subtitle), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)
    return pdf


def _header_row(pdf: FPDF, headers: list[str], widths: list[int]) -> None:
    """Draw a colored header row."""
    pdf.set_fill_color(*_COL_BG)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(_FONT, "B", 9)
    for i, (h, w) in enumerate(zip(headers, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(h), border=1, fill=True, align=align)
    pdf.ln()
    pdf.set_text_color(0, 0, 0)


def _data_row(pdf: FPDF, values: list[str], widths: list[int], bold: bool = False) -> None:
    """Draw a data row."""
    pdf.set_font(_FONT, "B" if bold else "", 8)
    for i, (v, w) in enumerate(zip(values, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(v), border="B", align=align)
    pdf.ln()


def _section_header(pdf: FPDF, text: str, total_width: int) -> None:
    """Draw a section header with light background."""
    pdf.set_fill_color(*_SEC_BG)
    pdf.set_font(_FONT, "B", 9)
    pdf.cell(total_width, _LINE_H, _safe_text(text), fill=True, new_x="LMARGIN", new_y="NEXT")


def _fmt(value: str) -> str:
    """Format a numeric string for display."""
    try:
        n = float(value)
        return f"{n:,.2f}"
    except (ValueError, TypeError):
        return str(value)


def _safe_text(text: str) -> str:
    """Replace non-latin-1 characters for PDF built-in fonts."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    """Output PDF to BytesIO."""
    buf = io.BytesIO()
    pdf.output(buf)
    buf.seek(0)
    return buf


# ── 1. Customer Debts ──────────────────────────────────────────────────────


def export_customer_debts_pdf(data: dict[str, Any], lang: str = "es") -> io.BytesIO:
    pdf = _new_pdf(
        t(lang, "customer_debts"),
        f"{t(lang, 'generated')}: {data['as_of']}",
    )
    widths = [60, 35, 30, 30, 35]
    _header_row(
        pdf,
        [
            t(lang, "order_date"),
            t(lang, "first_due"),
            t(lang, "second_due"),
            t(lang, "pending_orders"),
            t(lang, "remaining"),
        ],
        widths,
    )

    for cust in data.get("customers", []):
        earliest = cust["earliest_due_date"] or "-"
        _section_header(
            pdf,
            f"{cust['customer_name']}  |  {t(lang, 'earliest_due_date')}: {earliest}",
            sum(widths),
        )
        for order in cust["orders_pending"]:
            _data_row(
                pdf,
                [
                    f"  {order['order_date']}",
                    order["first_due"],
                    order["second_due"],
                    "",
                    _fmt(order["remaining"]),
                ],
                widths,
            )
        _data_row(
            pdf,
            [
                t(lang, "total_due"),
                "",
                "",
                str(len(cust["orders_pending"])),
                _fmt(cust["total_due"]),
            ],
            widths,
            bold=True,
        )
        pdf.ln(2)

    pdf.ln(2)
    _data_row(
        pdf,
        [t(lang, "total"), "", "", str(data.get("customer_count", 0)), _fmt(data.get("total_due", "0"))],
        widths,
        bold=True,
    )

    return _to_bytes(pdf)


# ── 2. Monthly Payment Calendar ─────────────────────────────────────────────


def export_month_schedule_pdf(data: dict[str, Any], lang: str = "es") -> io.BytesIO:
    pdf = _new_pdf(t(lang, "payment_calendar"), data["title"])
    widths = [35, 65, 30, 35, 25]
    _header_row(
        pdf,
        [
            t(lang, "events"),
            t(lang, "customer"),
            t(lang, "order_date"),
            t(lang, "remaining"),
            t(lang, "overdue"),
        ],
        widths,
    )

    for day in data.get("days", []):
        _section_header(
            pdf,
            f"{day['date']}  |  {t(lang, 'total_due_today')}: {_fmt(day['total_due_today'])}",
            sum(widths),
        )
        for event in day["events"]:
            if event["is_overdue"]:
                pdf.set_text_color(*_OVERDUE_TEXT)
            _data_row(
                pdf,
                [
                    event["kind_label"],
                    event["customer_name"],
                    event["original_order_date"],
                    _fmt(event["amount_remaining"]),
                    t(lang, "yes") if event["is_overdue"] else t(lang, "no"),
                ],
                widths,
            )
            pdf.set_text_color(0, 0, 0)
        pdf.ln(1)

    pdf.ln(2)
    _data_row(
        pdf,
        [t(lang, "total"), "", "", _fmt(data.get("total_due", "0")), ""],
        widths,
        bold=True,
    )

    return _to_bytes(pdf)
