from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.audit import AuditLog
from backend.app.services.audit import list_audit_logs

router = APIRouter()


class AuditLogOut(BaseModel):
    id: UUID
    action: str
    resource_type: str
    resource_id: str
    before: dict[str, Any] | None
    changes: dict[str, Any] | None
    ip_address: str | None
    created_at: datetime | None

    class Config:
        from_attributes = True


@router.get("/", response_model=list[AuditLogOut])
def get_audit_logs(
    action: str | None = Query(None, description="Filter by action (e.g. ORDER_CREATED, PAYMENT_RECORDED)"),
    resource_type: str | None = Query(None, description="Filter by resource (e.g. orders, payments, notes)"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
) -> list[AuditLog]:
    return list_audit_logs(db, resource_type=resource_type, action=action, limit=limit)
