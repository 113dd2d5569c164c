from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from backend.app.models.audit import AuditLog


def log_action(
    db: Session,
    *,
    action: str,
    resource_type: str,
    resource_id: str,
    changes: dict[str, Any] | None = None,
    old_values: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> None:
    """Queue a row for the audit_logs table.

    Every mutating service records its change through here. Nothing is
    committed: the row lands together with the caller's own transaction.
    """
    db.add(
        AuditLog(
            resource_type=resource_type,
            resource_id=resource_id,
            action=action,
            before=old_values,
            changes=changes,
            ip_address=ip_address,
        )
    )


def list_audit_logs(
    db: Session,
    *,
    resource_type: str | None = None,
    action: str | None = None,
    limit: int = 100,
) -> list[AuditLog]:
    """Most recent audit rows, newest first."""
    query = db.query(AuditLog)
    if resource_type:
        query = query.filter(AuditLog.resource_type == resource_type)
    if action:
        query = query.filter(AuditLog.action == action)
    return query.order_by(AuditLog.created_at.desc()).limit(limit).all()
