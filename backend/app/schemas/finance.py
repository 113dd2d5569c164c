from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, field_validator

from backend.app.models.finance import TransactionType


class OperationCreate(BaseModel):
    type: TransactionType
    amount: Decimal
    description: str
    date: str | None = None

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Description must not be empty")
        return v

    @field_validator("amount")
    @classmethod
    def amount_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v


class OperationOut(BaseModel):
    id: str
    type: str
    amount: str
    description: str
    date: str


class ChartSegment(BaseModel):
    key: str
    label: str
    value: str
    percentage: str


class FinancialSummary(BaseModel):
    total_paid: str
    total_pending: str
    total_order_investment: str
    total_revenue: str
    total_invested: str
    total_withdrawn: str
    current_balance: str
    net_cash_flow: str
    chart: list[ChartSegment]
