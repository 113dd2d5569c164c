from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.middleware.language import request_language
from backend.app.models.finance import TransactionType
from backend.app.schemas.finance import FinancialSummary, OperationCreate, OperationOut
from backend.app.services.finance import (
    get_financial_summary,
    list_operations,
    record_operation,
)

router = APIRouter()


@router.post("", response_model=OperationOut, status_code=status.HTTP_201_CREATED)
def create_operation(
    payload: OperationCreate,
    request: Request,
    db: Session = Depends(get_db),
) -> dict:
    try:
        return record_operation(
            db,
            type=payload.type,
            amount=payload.amount,
            description=payload.description,
            date=payload.date,
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=list[OperationOut])
def get_operations(
    type_filter: TransactionType | None = Query(None, alias="type"),
    db: Session = Depends(get_db),
) -> list[dict]:
    return list_operations(db, type=type_filter)


@router.get("/summary", response_model=FinancialSummary)
def get_summary(
    request: Request,
    lang: str | None = Query(None),
    db: Session = Depends(get_db),
) -> dict:
    return get_financial_summary(db, lang=request_language(request, lang))
