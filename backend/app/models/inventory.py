from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.core.database import Base


class InventoryItem(Base):
    """Stock kept on hand.

    ``unit_price`` is what the item cost to buy; ``sale_price`` is what the
    customer is charged.
    """

    __tablename__ = "inventory_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False
    )
    sale_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False
    )
    supplier: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("unit_price >= 0", name="ck_item_unit_price_non_negative"),
        CheckConstraint("sale_price >= 0", name="ck_item_sale_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="ck_item_stock_non_negative"),
        Index("ix_inventory_items_name", "name"),
    )

    @property
    def unit_profit(self) -> Decimal:
        return Decimal(str(self.sale_price)) - Decimal(str(self.unit_price))

    @property
    def total_sale_value(self) -> Decimal:
        return Decimal(str(self.sale_price)) * self.stock_quantity
