from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    Index,
    Numeric,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.core.database import Base


class TransactionType(str, enum.Enum):
    INVESTMENT = "investment"
    WITHDRAWAL = "withdrawal"


class FinancialTransaction(Base):
    """Owner money put into (investment) or taken out of (withdrawal) the business."""

    __tablename__ = "financial_transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(
            TransactionType,
            native_enum=False,
            values_callable=lambda cls: [m.value for m in cls],
        ),
        nullable=False,
    )
    transaction_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_fin_txn_amount_positive"),
        Index("ix_fin_txn_type", "type"),
        Index("ix_fin_txn_date", "transaction_date"),
    )
