from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator


class ItemCreate(BaseModel):
    name: str
    stock_quantity: int
    unit_price: Decimal
    sale_price: Decimal
    sku: str | None = None
    supplier: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be empty")
        return v

    @field_validator("stock_quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v

    @field_validator("unit_price", "sale_price")
    @classmethod
    def price_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero")
        return v


class ItemUpdate(BaseModel):
    name: str | None = None
    sku: str | None = None
    stock_quantity: int | None = None
    unit_price: Decimal | None = None
    sale_price: Decimal | None = None
    supplier: str | None = None

    @field_validator("stock_quantity")
    @classmethod
    def quantity_non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Quantity must be non-negative")
        return v

    @field_validator("unit_price", "sale_price")
    @classmethod
    def price_non_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Price must be non-negative")
        return v


class ItemOut(BaseModel):
    id: UUID
    name: str
    sku: str | None
    stock_quantity: int
    unit_price: Decimal
    sale_price: Decimal
    supplier: str | None
    unit_profit: Decimal
    total_sale_value: Decimal

    class Config:
        from_attributes = True


class InventorySummary(BaseModel):
    item_count: int
    total_investment: str
    total_potential_revenue: str
    total_potential_profit: str


class SalesSummary(BaseModel):
    total_collected: str
    total_pending: str
    total_sales_revenue: str


class InventoryOverview(BaseModel):
    inventory: InventorySummary
    sales: SalesSummary
