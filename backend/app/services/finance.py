from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy import func as sa_func
from sqlalchemy.orm import Session

from backend.app.models.finance import FinancialTransaction, TransactionType
from backend.app.models.order import Order, OrderStatus
from backend.app.services.audit import log_action
from backend.app.services.debts import to_money
from backend.app.services.export_i18n import t
from backend.app.services.orders import load_orders_with_payments

logger = logging.getLogger(__name__)

Q = Decimal("0.0001")
PCT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def record_operation(
    db: Session,
    *,
    type: TransactionType | str,
    amount: Decimal,
    description: str,
    date: str | None = None,
    ip_address: str | None = None,
) -> dict:
    """Record an owner investment or withdrawal."""
    txn_type = TransactionType(type)
    if to_money(amount) <= ZERO:
        raise ValueError("Amount must be greater than 0")
    if not description or not description.strip():
        raise ValueError("Description must not be empty")

    if date:
        txn_date = datetime.fromisoformat(date).replace(tzinfo=timezone.utc)
    else:
        txn_date = datetime.now(timezone.utc)

    amt = Decimal(str(amount)).quantize(Q, rounding=ROUND_HALF_UP)

    txn = FinancialTransaction(
        amount=amt,
        description=description.strip(),
        type=txn_type,
        transaction_date=txn_date,
    )
    db.add(txn)
    db.flush()

    log_action(
        db,
        action="INVESTMENT_RECORDED"
        if txn_type == TransactionType.INVESTMENT
        else "WITHDRAWAL_RECORDED",
        resource_type="financial_transactions",
        resource_id=str(txn.id),
        ip_address=ip_address,
        changes={
            "type": txn_type.value,
            "amount": str(amt),
            "description": txn.description,
        },
    )

    db.commit()
    logger.info("%s of %s recorded", txn_type.value.capitalize(), amt)

    return _txn_to_dict(txn)


def _txn_to_dict(txn: FinancialTransaction) -> dict:
    return {
        "id": str(txn.id),
        "type": txn.type.value,
        "amount": str(txn.amount),
        "description": txn.description,
        "date": txn.transaction_date.isoformat(timespec="seconds"),
    }


def list_operations(db: Session, type: str | None = None) -> list[dict]:
    """Return recent investments and withdrawals, newest first."""
    query = db.query(FinancialTransaction)
    if type:
        query = query.filter(FinancialTransaction.type == TransactionType(type))
    rows = (
        query.order_by(
            FinancialTransaction.transaction_date.desc(),
            FinancialTransaction.created_at.desc(),
        )
        .limit(100)
        .all()
    )
    return [_txn_to_dict(r) for r in rows]


def accumulated_totals(db: Session) -> dict[str, Decimal]:
    """Sum of all recorded investments and withdrawals."""
    rows = (
        db.query(
            FinancialTransaction.type,
            sa_func.coalesce(sa_func.sum(FinancialTransaction.amount), 0),
        )
        .group_by(FinancialTransaction.type)
        .all()
    )
    totals = {TransactionType.INVESTMENT: ZERO, TransactionType.WITHDRAWAL: ZERO}
    for txn_type, total in rows:
        totals[TransactionType(txn_type)] = Decimal(str(total))
    return {
        "invested": totals[TransactionType.INVESTMENT],
        "withdrawn": totals[TransactionType.WITHDRAWAL],
    }


def order_totals(orders: Iterable[Order]) -> dict[str, Decimal]:
    """Paid/pending income plus the purchase cost of every order.

    Only orders still marked pending count towards pending income.
    """
    total_paid = ZERO
    total_pending = ZERO
    total_invested = ZERO
    total_revenue = ZERO
    for order in orders:
        revenue = to_money(order.sale_price)
        paid = order.total_paid
        total_paid += paid
        if order.status == OrderStatus.PENDING:
            total_pending += revenue - paid
        total_invested += to_money(order.purchase_price)
        total_revenue += revenue
    return {
        "total_paid": total_paid,
        "total_pending": total_pending,
        "total_invested": total_invested,
        "total_revenue": total_revenue,
    }


def chart_breakdown(segments: list[tuple[str, Decimal]], lang: str = "es") -> list[dict]:
    """Share of each positive segment; empty segments are left out."""
    visible = [(key, value) for key, value in segments if value > ZERO]
    total = sum((v for _, v in visible), ZERO)
    result = []
    for key, value in visible:
        share = (value / total * HUNDRED).quantize(PCT, rounding=ROUND_HALF_UP)
        result.append(
            {
                "key": key,
                "label": t(lang, key),
                "value": str(value),
                "percentage": str(share),
            }
        )
    return result


def get_financial_summary(db: Session, lang: str = "es") -> dict:
    orders = order_totals(load_orders_with_payments(db))
    owner = accumulated_totals(db)

    # Real liquidity: money received minus what the owner put in and took out
    net_cash_flow = orders["total_paid"] - owner["invested"] - owner["withdrawn"]

    chart = chart_breakdown(
        [
            ("paid_income", orders["total_paid"]),
            ("pending_income", orders["total_pending"]),
            ("total_invested", owner["invested"]),
            ("total_withdrawn", owner["withdrawn"]),
        ],
        lang=lang,
    )

    return {
        "total_paid": str(orders["total_paid"]),
        "total_pending": str(orders["total_pending"]),
        "total_order_investment": str(orders["total_invested"]),
        "total_revenue": str(orders["total_revenue"]),
        "total_invested": str(owner["invested"]),
        "total_withdrawn": str(owner["withdrawn"]),
        "current_balance": str(orders["total_paid"]),
        "net_cash_flow": str(net_cash_flow),
        "chart": chart,
    }
