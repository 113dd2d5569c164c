from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.middleware.language import request_language
from backend.app.schemas.statistics import (
    CalendarMonth,
    CustomerDebtsReport,
    DayDetail,
    PeriodStatistics,
)
from backend.app.services.audit import log_action
from backend.app.services.debts import local_now
from backend.app.services.export_excel import (
    export_customer_debts_excel,
    export_month_schedule_excel,
)
from backend.app.services.export_pdf import (
    export_customer_debts_pdf,
    export_month_schedule_pdf,
)
from backend.app.services.statistics import (
    get_calendar_month,
    get_customer_debts,
    get_day_detail,
    get_month_schedule,
    get_period_statistics,
)

router = APIRouter()


@router.get("/summary", response_model=PeriodStatistics)
def period_summary(
    request: Request,
    period: str = Query("month", pattern="^(week|month|year)$"),
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> dict:
    try:
        return get_period_statistics(db, period, lang=request_language(request, lang))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/debts", response_model=CustomerDebtsReport)
def customer_debts(db: Session = Depends(get_db)) -> dict:
    return get_customer_debts(db)


@router.get("/calendar", response_model=CalendarMonth)
def calendar_month(
    request: Request,
    year: int | None = Query(None, ge=1900, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> dict:
    return get_calendar_month(db, year, month, lang=request_language(request, lang))


# ── Export helpers ────────────────────────────────────────────────────────

_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_PDF_MIME = "application/pdf"


def _export_response(
    buf: object, media_type: str, filename: str,
) -> StreamingResponse:
    return StreamingResponse(
        buf,  # type: ignore[arg-type]
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _log_export(db: Session, report_name: str, fmt: str, request: Request) -> None:
    log_action(
        db,
        action="REPORT_EXPORTED",
        resource_type="reports",
        resource_id=report_name,
        changes={"format": fmt},
        ip_address=request.client.host if request.client else None,
    )
    db.commit()


def _month_or_current(year: int | None, month: int | None) -> tuple[int, int]:
    today = local_now().date()
    return year or today.year, month or today.month


# ── Customer debt exports ────────────────────────────────────────────────


@router.get("/debts/export/excel")
def customer_debts_export_excel(
    request: Request,
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    lang = request_language(request, lang)
    buf = export_customer_debts_excel(get_customer_debts(db), lang=lang)
    _log_export(db, "customer-debts", "excel", request)
    return _export_response(buf, _XLSX_MIME, "customer-debts.xlsx")


@router.get("/debts/export/pdf")
def customer_debts_export_pdf(
    request: Request,
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    lang = request_language(request, lang)
    buf = export_customer_debts_pdf(get_customer_debts(db), lang=lang)
    _log_export(db, "customer-debts", "pdf", request)
    return _export_response(buf, _PDF_MIME, "customer-debts.pdf")


# ── Payment calendar exports ─────────────────────────────────────────────


@router.get("/calendar/export/excel")
def calendar_export_excel(
    request: Request,
    year: int | None = Query(None, ge=1900, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    lang = request_language(request, lang)
    year, month = _month_or_current(year, month)
    data = get_month_schedule(db, year, month, lang=lang)
    buf = export_month_schedule_excel(data, lang=lang)
    _log_export(db, "payment-calendar", "excel", request)
    return _export_response(buf, _XLSX_MIME, f"payment-calendar-{year}-{month:02d}.xlsx")


@router.get("/calendar/export/pdf")
def calendar_export_pdf(
    request: Request,
    year: int | None = Query(None, ge=1900, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    lang = request_language(request, lang)
    year, month = _month_or_current(year, month)
    data = get_month_schedule(db, year, month, lang=lang)
    buf = export_month_schedule_pdf(data, lang=lang)
    _log_export(db, "payment-calendar", "pdf", request)
    return _export_response(buf, _PDF_MIME, f"payment-calendar-{year}-{month:02d}.pdf")


@router.get("/calendar/{day}", response_model=DayDetail)
def calendar_day(
    day: date,
    request: Request,
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> dict:
    return get_day_detail(db, day, lang=request_language(request, lang))
