"""Shared test fixtures.

Each test runs against a fresh in-memory SQLite database, so tests never
pollute each other or the real database.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from backend.app.core.database import Base, get_db
from backend.app.main import app
from backend.app.models.audit import AuditLog  # noqa: F401
from backend.app.models.finance import FinancialTransaction  # noqa: F401
from backend.app.models.inventory import InventoryItem
from backend.app.models.note import Note  # noqa: F401
from backend.app.models.order import Order, OrderStatus, Payment
from backend.app.services.debts import local_now, local_tz


# ─── DB session on a throwaway database ───────────────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    """Yield a session bound to a private in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = Session(bind=engine)

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Time ─────────────────────────────────────────────────────────────────────


@pytest.fixture()
def today() -> date:
    """Today in the configured zone, the same day the endpoints use."""
    return local_now().date()


@pytest.fixture()
def noon(today: date) -> datetime:
    return datetime.combine(today, time(12), tzinfo=local_tz())


# ─── Order fixtures ───────────────────────────────────────────────────────────


@pytest.fixture()
def make_order(db: Session) -> Callable[..., Order]:
    """Factory that persists an order with optional payments."""

    def _make(
        customer_name: str = "María Pérez",
        sale_price: str = "100",
        purchase_price: str = "60",
        order_date: date | None = None,
        payments: list[str] | None = None,
        product_description: str = "Zapatos",
    ) -> Order:
        order = Order(
            order_date=order_date or local_now().date(),
            customer_name=customer_name,
            product_description=product_description,
            purchase_price=Decimal(purchase_price),
            sale_price=Decimal(sale_price),
        )
        for i, amount in enumerate(payments or []):
            order.payments.append(
                Payment(
                    amount=Decimal(amount),
                    payment_date=local_now() - timedelta(minutes=i),
                    reference_number=f"REF-{i}",
                )
            )
        if order.total_paid >= order.sale_price:
            order.status = OrderStatus.PAID
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make


# ─── Inventory fixtures ───────────────────────────────────────────────────────


@pytest.fixture()
def item_a(db: Session) -> InventoryItem:
    item = InventoryItem(
        name="Camiseta básica",
        sku="CAM-001",
        stock_quantity=10,
        unit_price=Decimal("4.5000"),
        sale_price=Decimal("9.0000"),
        supplier="Textiles",
    )
    db.add(item)
    db.commit()
    return item


@pytest.fixture()
def item_b(db: Session) -> InventoryItem:
    item = InventoryItem(
        name="Gorra",
        sku="GOR-002",
        stock_quantity=4,
        unit_price=Decimal("6.0000"),
        sale_price=Decimal("12.0000"),
    )
    db.add(item)
    db.commit()
    return item
