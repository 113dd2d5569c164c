from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.core.database import Base


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class MerchandiseStatus(str, enum.Enum):
    TO_BUY = "to_buy"
    PURCHASED = "purchased"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Order(Base):
    """A customer commitment to buy an item at an agreed sale price."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_date: Mapped[date] = mapped_column(Date, nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_description: Mapped[str] = mapped_column(Text, nullable=False)
    purchase_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )
    sale_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    merchandise_status: Mapped[MerchandiseStatus] = mapped_column(
        Enum(MerchandiseStatus, native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=MerchandiseStatus.TO_BUY,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=func.now()
    )

    payments: Mapped[list[Payment]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Payment.payment_date.desc()",
    )

    __table_args__ = (
        CheckConstraint("sale_price >= 0", name="ck_order_sale_price_non_negative"),
        CheckConstraint(
            "purchase_price >= 0", name="ck_order_purchase_price_non_negative"
        ),
        Index("ix_orders_order_date", "order_date"),
        Index("ix_orders_customer_name", "customer_name"),
        Index("ix_orders_status", "status"),
    )

    @property
    def profit(self) -> Decimal:
        return Decimal(str(self.sale_price)) - Decimal(str(self.purchase_price))

    @property
    def total_paid(self) -> Decimal:
        return sum((Decimal(str(p.amount)) for p in self.payments), Decimal("0"))


class Payment(Base):
    """A partial or full settlement ("abono") recorded against an order."""

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False
    )
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    reference_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Proof-of-payment location only; the file itself lives elsewhere
    payment_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    order: Mapped[Order] = relationship(back_populates="payments")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payment_amount_positive"),
        Index("ix_payments_order", "order_id"),
        Index("ix_payments_payment_date", "payment_date"),
    )
