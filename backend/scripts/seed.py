"""Seed the database with demo orders, payments, stock and owner operations.

Usage:
    python -m backend.scripts.seed
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from backend.app.core.database import Base, SessionLocal, engine
from backend.app.models.audit import AuditLog  # noqa: F401
from backend.app.models.finance import FinancialTransaction, TransactionType
from backend.app.models.inventory import InventoryItem
from backend.app.models.note import Note
from backend.app.models.order import MerchandiseStatus, Order, OrderStatus, Payment

# (customer, product, purchase, sale, days ago, payments)
ORDERS: list[tuple[str, str, str, str, int, list[str]]] = [
    ("María Pérez", "Zapatos deportivos talla 38", "35.00", "60.00", 20, ["20.00"]),
    ("María Pérez", "Bolso de cuero", "50.00", "90.00", 3, []),
    ("José Rodríguez", "Audífonos inalámbricos", "25.00", "45.00", 40, ["10.00", "10.00"]),
    ("Ana Gómez", "Perfume 100ml", "40.00", "75.00", 10, ["75.00"]),
    ("Luis Fernández", "Reloj de pulsera", "80.00", "130.00", 1, ["30.00"]),
]

ITEMS: list[tuple[str, str, int, str, str, str]] = [
    ("Camiseta básica", "CAM-001", 12, "4.50", "9.00", "Textiles Caracas"),
    ("Gorra bordada", "GOR-002", 6, "6.00", "12.00", "Textiles Caracas"),
    ("Cargador USB-C", "CAR-003", 20, "3.00", "7.50", "ElectroImport"),
]

OPERATIONS: list[tuple[TransactionType, str, str]] = [
    (TransactionType.INVESTMENT, "100.00", "Capital inicial"),
    (TransactionType.WITHDRAWAL, "15.00", "Gastos personales"),
]


def seed() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Order).first():
            print("Database already has orders, skipping seed.")
            return

        today = date.today()
        now = datetime.now(timezone.utc)

        # ── Orders and payments ────────────────────────────────────────
        for customer, product, purchase, sale, days_ago, amounts in ORDERS:
            order = Order(
                order_date=today - timedelta(days=days_ago),
                customer_name=customer,
                product_description=product,
                purchase_price=Decimal(purchase),
                sale_price=Decimal(sale),
                merchandise_status=MerchandiseStatus.PURCHASED
                if days_ago > 5
                else MerchandiseStatus.TO_BUY,
            )
            for i, amount in enumerate(amounts):
                order.payments.append(
                    Payment(
                        amount=Decimal(amount),
                        payment_date=now - timedelta(days=days_ago - i - 1),
                        reference_number=f"REF-{days_ago:02d}{i}",
                    )
                )
            if order.total_paid >= order.sale_price:
                order.status = OrderStatus.PAID
            db.add(order)
            print(f"Created order: {customer} - {product}")

        # ── Inventory ──────────────────────────────────────────────────
        for name, sku, qty, unit, sale, supplier in ITEMS:
            db.add(
                InventoryItem(
                    name=name,
                    sku=sku,
                    stock_quantity=qty,
                    unit_price=Decimal(unit),
                    sale_price=Decimal(sale),
                    supplier=supplier,
                )
            )
            print(f"Created item: {sku} - {name}")

        # ── Owner operations ───────────────────────────────────────────
        for txn_type, amount, description in OPERATIONS:
            db.add(
                FinancialTransaction(
                    type=txn_type,
                    amount=Decimal(amount),
                    description=description,
                    transaction_date=now,
                )
            )
            print(f"Recorded {txn_type.value}: {amount}")

        db.add(Note(note_text="Llamar a José por el segundo abono."))

        db.commit()
        print("Seed completed successfully.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
