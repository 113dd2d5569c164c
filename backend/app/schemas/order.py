from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, field_validator

from backend.app.models.order import MerchandiseStatus, OrderStatus


class OrderCreate(BaseModel):
    order_date: date
    customer_name: str
    product_description: str
    purchase_price: Decimal
    sale_price: Decimal
    status: OrderStatus = OrderStatus.PENDING
    merchandise_status: MerchandiseStatus = MerchandiseStatus.TO_BUY

    @field_validator("customer_name", "product_description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be empty")
        return v

    @field_validator("purchase_price", "sale_price")
    @classmethod
    def price_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price must be non-negative")
        return v


class OrderUpdate(BaseModel):
    order_date: date | None = None
    customer_name: str | None = None
    product_description: str | None = None
    purchase_price: Decimal | None = None
    sale_price: Decimal | None = None
    status: OrderStatus | None = None
    merchandise_status: MerchandiseStatus | None = None

    @field_validator("purchase_price", "sale_price")
    @classmethod
    def price_non_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Price must be non-negative")
        return v


class OrderOut(BaseModel):
    id: str
    order_date: str
    customer_name: str
    product_description: str
    purchase_price: str
    sale_price: str
    profit: str
    status: str
    merchandise_status: str
    total_paid: str
    remaining: str
    payment_count: int


class PaymentCreate(BaseModel):
    amount: Decimal
    reference_number: str | None = None
    payment_image_url: str | None = None
    payment_date: datetime | None = None

    @field_validator("amount")
    @classmethod
    def amount_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v


class PaymentOut(BaseModel):
    id: str
    order_id: str
    amount: str
    payment_date: str
    reference_number: str | None
    payment_image_url: str | None


class PaymentRecorded(PaymentOut):
    order_status: str
    order_total_paid: str
    order_remaining: str


class OrderDetailOut(OrderOut):
    payments: list[PaymentOut]


class OrderPaymentsOut(BaseModel):
    order_id: str
    customer_name: str
    order_total: str
    total_paid: str
    remaining: str
    payments: list[PaymentOut]
