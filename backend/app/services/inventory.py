from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.models.inventory import InventoryItem
from backend.app.models.order import Order
from backend.app.services.audit import log_action
from backend.app.services.debts import to_money
from backend.app.services.orders import load_orders_with_payments

Q = Decimal("0.0001")
ZERO = Decimal("0")

_UPDATABLE_FIELDS = {"name", "sku", "stock_quantity", "unit_price", "sale_price", "supplier"}
_REQUIRED_FIELDS = {"name", "stock_quantity", "unit_price", "sale_price"}


def _get_item(db: Session, item_id: UUID) -> InventoryItem:
    item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
    if not item:
        raise ValueError("Inventory item not found")
    return item


def _clean_sku(sku: str | None) -> str | None:
    return (sku or "").strip() or None


def _ensure_sku_free(db: Session, sku: str | None, exclude_id: UUID | None = None) -> None:
    if sku is None:
        return
    query = db.query(InventoryItem).filter(InventoryItem.sku == sku)
    if exclude_id is not None:
        query = query.filter(InventoryItem.id != exclude_id)
    if query.first():
        raise ValueError(f"SKU '{sku}' is already in use")


def create_item(
    db: Session,
    *,
    name: str,
    stock_quantity: int,
    unit_price: Decimal,
    sale_price: Decimal,
    sku: str | None = None,
    supplier: str | None = None,
    ip_address: str | None = None,
) -> InventoryItem:
    """Add a new article to the stock list.

    A new article needs a name, a positive quantity and positive purchase
    and sale prices.
    """
    if not name.strip():
        raise ValueError("Name must not be empty")
    if stock_quantity <= 0:
        raise ValueError("Quantity must be greater than zero")
    if to_money(unit_price) <= ZERO or to_money(sale_price) <= ZERO:
        raise ValueError("Purchase and sale prices must be greater than zero")

    sku = _clean_sku(sku)
    _ensure_sku_free(db, sku)

    item = InventoryItem(
        name=name.strip(),
        sku=sku,
        stock_quantity=stock_quantity,
        unit_price=Decimal(str(unit_price)).quantize(Q, rounding=ROUND_HALF_UP),
        sale_price=Decimal(str(sale_price)).quantize(Q, rounding=ROUND_HALF_UP),
        supplier=(supplier or "").strip() or None,
    )
    db.add(item)
    db.flush()

    log_action(
        db,
        action="INVENTORY_ITEM_CREATED",
        resource_type="inventory_items",
        resource_id=str(item.id),
        ip_address=ip_address,
        changes={
            "name": item.name,
            "sku": item.sku,
            "stock_quantity": item.stock_quantity,
            "unit_price": str(item.unit_price),
            "sale_price": str(item.sale_price),
        },
    )

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ValueError("Inventory item violates a constraint") from exc
    db.refresh(item)
    return item


def update_item(
    db: Session,
    item_id: UUID,
    changes: dict[str, Any],
    ip_address: str | None = None,
) -> InventoryItem:
    item = _get_item(db, item_id)
    update_data = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}

    missing = sorted(
        k for k in _REQUIRED_FIELDS & update_data.keys() if update_data[k] is None
    )
    if missing:
        raise ValueError(f"{', '.join(missing)} must not be null")
    if "name" in update_data:
        if not update_data["name"].strip():
            raise ValueError("Name must not be empty")
        update_data["name"] = update_data["name"].strip()
    if "stock_quantity" in update_data and update_data["stock_quantity"] < 0:
        raise ValueError("Quantity must be non-negative")
    for price_field in ("unit_price", "sale_price"):
        if price_field in update_data:
            if to_money(update_data[price_field]) < ZERO:
                raise ValueError("Price must be non-negative")
            update_data[price_field] = Decimal(str(update_data[price_field])).quantize(
                Q, rounding=ROUND_HALF_UP
            )
    if "sku" in update_data:
        update_data["sku"] = _clean_sku(update_data["sku"])
        _ensure_sku_free(db, update_data["sku"], exclude_id=item.id)
    if "supplier" in update_data:
        update_data["supplier"] = (update_data["supplier"] or "").strip() or None

    old_values = {f: str(getattr(item, f)) for f in update_data}
    for field_name, value in update_data.items():
        setattr(item, field_name, value)

    log_action(
        db,
        action="PRICE_CHANGE"
        if ("unit_price" in update_data or "sale_price" in update_data)
        else "INVENTORY_ITEM_UPDATED",
        resource_type="inventory_items",
        resource_id=str(item.id),
        ip_address=ip_address,
        old_values=old_values,
        changes={f: str(v) for f, v in update_data.items()},
    )

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ValueError("Inventory item violates a constraint") from exc
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: UUID, ip_address: str | None = None) -> None:
    item = _get_item(db, item_id)
    log_action(
        db,
        action="INVENTORY_ITEM_DELETED",
        resource_type="inventory_items",
        resource_id=str(item.id),
        ip_address=ip_address,
        old_values={"name": item.name, "sku": item.sku},
    )
    db.delete(item)
    db.commit()


def list_items(db: Session, search: str | None = None) -> list[InventoryItem]:
    query = db.query(InventoryItem)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(InventoryItem.name.ilike(pattern), InventoryItem.sku.ilike(pattern))
        )
    return query.order_by(InventoryItem.name).all()


# ─── Summaries ────────────────────────────────────────────────────────────────


def inventory_summary(items: Iterable[InventoryItem]) -> dict:
    """Value of everything in stock, at cost and at sale price."""
    total_investment = ZERO
    potential_revenue = ZERO
    count = 0
    for item in items:
        count += 1
        total_investment += to_money(item.unit_price) * item.stock_quantity
        potential_revenue += to_money(item.sale_price) * item.stock_quantity

    return {
        "item_count": count,
        "total_investment": str(total_investment),
        "total_potential_revenue": str(potential_revenue),
        "total_potential_profit": str(potential_revenue - total_investment),
    }


def sales_summary(orders: Iterable[Order]) -> dict:
    """Money collected and still owed across every order."""
    collected = ZERO
    pending = ZERO
    revenue = ZERO
    for order in orders:
        sale = to_money(order.sale_price)
        paid = order.total_paid
        collected += paid
        pending += sale - paid
        revenue += sale

    return {
        "total_collected": str(collected),
        "total_pending": str(pending),
        "total_sales_revenue": str(revenue),
    }


def get_inventory_overview(db: Session) -> dict:
    # Summaries always cover the full stock list, never a search result
    return {
        "inventory": inventory_summary(db.query(InventoryItem).all()),
        "sales": sales_summary(load_orders_with_payments(db)),
    }
