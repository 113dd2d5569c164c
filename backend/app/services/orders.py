from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from backend.app.models.order import MerchandiseStatus, Order, OrderStatus, Payment
from backend.app.services.audit import log_action
from backend.app.services.debts import remaining_balance, to_money

logger = logging.getLogger(__name__)

Q = Decimal("0.0001")
ZERO = Decimal("0")

_UPDATABLE_FIELDS = {
    "order_date",
    "customer_name",
    "product_description",
    "purchase_price",
    "sale_price",
    "status",
    "merchandise_status",
}


def _q(value: Decimal) -> Decimal:
    return Decimal(str(value)).quantize(Q, rounding=ROUND_HALF_UP)


def _audit_value(value: Any) -> str:
    return str(getattr(value, "value", value))


def _get_order(db: Session, order_id: UUID) -> Order:
    order = (
        db.query(Order)
        .options(selectinload(Order.payments))
        .filter(Order.id == order_id)
        .first()
    )
    if not order:
        raise ValueError("Order not found")
    return order


def order_to_dict(order: Order) -> dict:
    total_paid = order.total_paid
    return {
        "id": str(order.id),
        "order_date": order.order_date.isoformat(),
        "customer_name": order.customer_name,
        "product_description": order.product_description,
        "purchase_price": str(order.purchase_price),
        "sale_price": str(order.sale_price),
        "profit": str(order.profit),
        "status": order.status.value,
        "merchandise_status": order.merchandise_status.value,
        "total_paid": str(total_paid),
        "remaining": str(remaining_balance(order.sale_price, [total_paid])),
        "payment_count": len(order.payments),
    }


def payment_to_dict(payment: Payment) -> dict:
    return {
        "id": str(payment.id),
        "order_id": str(payment.order_id),
        "amount": str(payment.amount),
        "payment_date": payment.payment_date.isoformat(timespec="seconds"),
        "reference_number": payment.reference_number,
        "payment_image_url": payment.payment_image_url,
    }


def _validate_order_fields(data: dict[str, Any]) -> None:
    for name in ("customer_name", "product_description"):
        if name in data and not str(data[name] or "").strip():
            raise ValueError(f"{name} must not be empty")
    for name in ("purchase_price", "sale_price"):
        if name in data and to_money(data[name]) < ZERO:
            raise ValueError(f"{name} must be non-negative")


# ─── Orders ───────────────────────────────────────────────────────────────────


def create_order(
    db: Session,
    *,
    order_date: date,
    customer_name: str,
    product_description: str,
    purchase_price: Decimal,
    sale_price: Decimal,
    status: OrderStatus = OrderStatus.PENDING,
    merchandise_status: MerchandiseStatus = MerchandiseStatus.TO_BUY,
    ip_address: str | None = None,
) -> dict:
    _validate_order_fields(
        {
            "customer_name": customer_name,
            "product_description": product_description,
            "purchase_price": purchase_price,
            "sale_price": sale_price,
        }
    )

    order = Order(
        order_date=order_date,
        customer_name=customer_name.strip(),
        product_description=product_description.strip(),
        purchase_price=_q(purchase_price),
        sale_price=_q(sale_price),
        status=OrderStatus(status),
        merchandise_status=MerchandiseStatus(merchandise_status),
    )
    db.add(order)
    db.flush()

    log_action(
        db,
        action="ORDER_CREATED",
        resource_type="orders",
        resource_id=str(order.id),
        ip_address=ip_address,
        changes={
            "customer": order.customer_name,
            "order_date": order.order_date.isoformat(),
            "sale_price": str(order.sale_price),
            "purchase_price": str(order.purchase_price),
        },
    )

    db.commit()
    db.refresh(order)
    logger.info("Order %s created for %s", order.id, order.customer_name)
    return order_to_dict(order)


def update_order(
    db: Session,
    order_id: UUID,
    changes: dict[str, Any],
    ip_address: str | None = None,
) -> dict:
    order = _get_order(db, order_id)

    update_data = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
    missing = sorted(k for k, v in update_data.items() if v is None)
    if missing:
        raise ValueError(f"{', '.join(missing)} must not be null")
    _validate_order_fields(update_data)

    old_values = {f: _audit_value(getattr(order, f)) for f in update_data}
    for field_name, value in update_data.items():
        if field_name in ("purchase_price", "sale_price"):
            value = _q(value)
        elif field_name in ("customer_name", "product_description"):
            value = value.strip()
        elif field_name == "status":
            value = OrderStatus(value)
        elif field_name == "merchandise_status":
            value = MerchandiseStatus(value)
        setattr(order, field_name, value)

    log_action(
        db,
        action="ORDER_UPDATED",
        resource_type="orders",
        resource_id=str(order.id),
        ip_address=ip_address,
        old_values=old_values,
        changes={f: _audit_value(getattr(order, f)) for f in update_data},
    )

    db.commit()
    db.refresh(order)
    return order_to_dict(order)


def delete_order(db: Session, order_id: UUID, ip_address: str | None = None) -> None:
    order = _get_order(db, order_id)
    log_action(
        db,
        action="ORDER_DELETED",
        resource_type="orders",
        resource_id=str(order.id),
        ip_address=ip_address,
        old_values={
            "customer": order.customer_name,
            "sale_price": str(order.sale_price),
            "payments": len(order.payments),
        },
    )
    db.delete(order)
    db.commit()
    logger.info("Order %s deleted", order_id)


def get_order_detail(db: Session, order_id: UUID) -> dict:
    order = _get_order(db, order_id)
    detail = order_to_dict(order)
    detail["payments"] = [payment_to_dict(p) for p in order.payments]
    return detail


def load_orders_with_payments(db: Session) -> list[Order]:
    """All orders with their payments, newest order date first."""
    return (
        db.query(Order)
        .options(selectinload(Order.payments))
        .order_by(Order.order_date.desc(), Order.created_at.desc())
        .all()
    )


def list_orders(
    db: Session,
    *,
    search: str | None = None,
    status: str | None = None,
) -> list[dict]:
    query = db.query(Order).options(selectinload(Order.payments))
    if status:
        query = query.filter(Order.status == OrderStatus(status))
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Order.customer_name.ilike(pattern),
                Order.product_description.ilike(pattern),
            )
        )
    orders = query.order_by(Order.order_date.desc(), Order.created_at.desc()).all()
    return [order_to_dict(o) for o in orders]


# ─── Payments ─────────────────────────────────────────────────────────────────


def _sync_status(order: Order) -> None:
    """Mark an order paid once payments cover its sale price, pending otherwise."""
    covered = order.total_paid >= to_money(order.sale_price)
    if covered and order.status != OrderStatus.PAID:
        order.status = OrderStatus.PAID
    elif not covered and order.status == OrderStatus.PAID:
        order.status = OrderStatus.PENDING


def record_payment(
    db: Session,
    *,
    order_id: UUID,
    amount: Decimal,
    reference_number: str | None = None,
    payment_image_url: str | None = None,
    payment_date: datetime | None = None,
    ip_address: str | None = None,
) -> dict:
    if to_money(amount) <= ZERO:
        raise ValueError("Amount must be greater than 0")

    order = _get_order(db, order_id)

    payment = Payment(
        amount=_q(amount),
        payment_date=payment_date or datetime.now(timezone.utc),
        reference_number=(reference_number or "").strip() or None,
        payment_image_url=payment_image_url or None,
    )
    order.payments.append(payment)
    db.flush()

    previous_status = order.status
    _sync_status(order)

    log_action(
        db,
        action="PAYMENT_RECORDED",
        resource_type="payments",
        resource_id=str(payment.id),
        ip_address=ip_address,
        changes={
            "order_id": str(order.id),
            "customer": order.customer_name,
            "amount": str(payment.amount),
            "reference_number": payment.reference_number,
            "order_status": order.status.value,
        },
    )

    db.commit()
    db.refresh(order)

    if previous_status != order.status:
        logger.info("Order %s is now %s", order.id, order.status.value)

    result = payment_to_dict(payment)
    result["order_status"] = order.status.value
    result["order_total_paid"] = str(order.total_paid)
    result["order_remaining"] = str(remaining_balance(order.sale_price, [order.total_paid]))
    return result


def delete_payment(
    db: Session, payment_id: UUID, ip_address: str | None = None
) -> dict:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise ValueError("Payment not found")

    order = _get_order(db, payment.order_id)
    log_action(
        db,
        action="PAYMENT_DELETED",
        resource_type="payments",
        resource_id=str(payment.id),
        ip_address=ip_address,
        old_values={
            "order_id": str(order.id),
            "amount": str(payment.amount),
            "reference_number": payment.reference_number,
        },
    )

    order.payments.remove(payment)
    db.flush()
    _sync_status(order)

    db.commit()
    db.refresh(order)
    return order_to_dict(order)


def list_payments(
    db: Session, order_id: UUID, search: str | None = None
) -> dict:
    """Payments of one order, newest first, optionally filtered by reference."""
    order = _get_order(db, order_id)
    payments = list(order.payments)
    if search:
        needle = search.strip().lower()
        payments = [
            p for p in payments
            if p.reference_number and needle in p.reference_number.lower()
        ]

    total_paid = order.total_paid
    return {
        "order_id": str(order.id),
        "customer_name": order.customer_name,
        "order_total": str(order.sale_price),
        "total_paid": str(total_paid),
        # Signed: overpayments show up as a negative balance
        "remaining": str(to_money(order.sale_price) - total_paid),
        "payments": [payment_to_dict(p) for p in payments],
    }
