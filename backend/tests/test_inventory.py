"""Tests for stock items and the inventory/sales summaries."""
from __future__ import annotations

from decimal import Decimal
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.models.inventory import InventoryItem
from backend.app.models.order import Order
from backend.app.services.inventory import (
    create_item,
    get_inventory_overview,
    list_items,
    update_item,
)

INVENTORY = "/api/v1/inventory"


class TestInventoryService:
    def test_create_item(self, db: Session) -> None:
        item = create_item(
            db,
            name=" Cargador USB-C ",
            stock_quantity=20,
            unit_price=Decimal("3"),
            sale_price=Decimal("7.5"),
            sku=" CAR-003 ",
        )
        assert item.name == "Cargador USB-C"
        assert item.sku == "CAR-003"
        assert item.unit_profit == Decimal("4.5")
        assert item.total_sale_value == Decimal("150.0")

    @pytest.mark.parametrize(
        ("name", "qty", "unit", "sale", "message"),
        [
            ("", 1, "1", "2", "Name"),
            ("Gorra", 0, "1", "2", "Quantity"),
            ("Gorra", 1, "0", "2", "prices"),
            ("Gorra", 1, "1", "0", "prices"),
        ],
    )
    def test_create_validation(
        self, db: Session, name: str, qty: int, unit: str, sale: str, message: str
    ) -> None:
        with pytest.raises(ValueError, match=message):
            create_item(
                db,
                name=name,
                stock_quantity=qty,
                unit_price=Decimal(unit),
                sale_price=Decimal(sale),
            )

    def test_duplicate_sku_rejected(self, db: Session, item_a: InventoryItem) -> None:
        with pytest.raises(ValueError, match="already in use"):
            create_item(
                db,
                name="Otra camiseta",
                stock_quantity=1,
                unit_price=Decimal("1"),
                sale_price=Decimal("2"),
                sku="CAM-001",
            )

    def test_blank_sku_is_stored_as_null(self, db: Session) -> None:
        first = create_item(
            db, name="A", stock_quantity=1, unit_price=Decimal("1"),
            sale_price=Decimal("2"), sku="  ",
        )
        second = create_item(
            db, name="B", stock_quantity=1, unit_price=Decimal("1"),
            sale_price=Decimal("2"), sku="",
        )
        assert first.sku is None and second.sku is None

    def test_update_allows_zero_stock(self, db: Session, item_a: InventoryItem) -> None:
        item = update_item(db, item_a.id, {"stock_quantity": 0})
        assert item.stock_quantity == 0

    def test_update_rejects_negative_price(
        self, db: Session, item_a: InventoryItem
    ) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            update_item(db, item_a.id, {"sale_price": Decimal("-1")})

    def test_update_normalizes_like_create(
        self, db: Session, item_a: InventoryItem
    ) -> None:
        item = update_item(
            db,
            item_a.id,
            {
                "name": "  Camiseta larga ",
                "unit_price": Decimal("4.123456"),
                "supplier": " ",
            },
        )
        assert item.name == "Camiseta larga"
        assert item.unit_price == Decimal("4.1235")
        assert item.supplier is None

    def test_update_rejects_null_required_fields(
        self, db: Session, item_a: InventoryItem
    ) -> None:
        message = "stock_quantity, unit_price must not be null"
        with pytest.raises(ValueError, match=message):
            update_item(db, item_a.id, {"unit_price": None, "stock_quantity": None})
        db.refresh(item_a)
        assert item_a.stock_quantity == 10
        assert item_a.unit_price == Decimal("4.5")

    def test_update_allows_clearing_sku(self, db: Session, item_a: InventoryItem) -> None:
        item = update_item(db, item_a.id, {"sku": None, "supplier": None})
        assert item.sku is None and item.supplier is None

    def test_search_by_name_or_sku(
        self, db: Session, item_a: InventoryItem, item_b: InventoryItem
    ) -> None:
        assert [i.name for i in list_items(db)] == ["Camiseta básica", "Gorra"]
        assert [i.name for i in list_items(db, search="gor")] == ["Gorra"]
        assert [i.name for i in list_items(db, search="cam-0")] == ["Camiseta básica"]

    def test_overview(
        self,
        db: Session,
        item_a: InventoryItem,
        item_b: InventoryItem,
        make_order: Callable[..., Order],
    ) -> None:
        make_order(sale_price="100", payments=["40"])
        make_order(sale_price="50", payments=["50"])

        overview = get_inventory_overview(db)
        inv = overview["inventory"]
        # 10 x 4.50 + 4 x 6.00 at cost, 10 x 9.00 + 4 x 12.00 at sale price
        assert inv["item_count"] == 2
        assert Decimal(inv["total_investment"]) == Decimal("69")
        assert Decimal(inv["total_potential_revenue"]) == Decimal("138")
        assert Decimal(inv["total_potential_profit"]) == Decimal("69")

        sales = overview["sales"]
        assert Decimal(sales["total_collected"]) == Decimal("90")
        assert Decimal(sales["total_pending"]) == Decimal("60")
        assert Decimal(sales["total_sales_revenue"]) == Decimal("150")


class TestInventoryEndpoints:
    def test_create_and_list(self, client: TestClient) -> None:
        resp = client.post(
            INVENTORY,
            json={
                "name": "Camiseta",
                "stock_quantity": 5,
                "unit_price": "2",
                "sale_price": "5",
                "sku": "X-1",
            },
        )
        assert resp.status_code == 201
        body = resp.json()
        assert Decimal(body["unit_profit"]) == Decimal("3")
        assert Decimal(body["total_sale_value"]) == Decimal("25")

        listed = client.get(INVENTORY, params={"search": "CAMI"}).json()
        assert [i["sku"] for i in listed] == ["X-1"]

    def test_create_validation_is_422(self, client: TestClient) -> None:
        resp = client.post(
            INVENTORY,
            json={"name": "A", "stock_quantity": 0, "unit_price": "1", "sale_price": "2"},
        )
        assert resp.status_code == 422

    def test_duplicate_sku_is_400(self, client: TestClient, item_a: InventoryItem) -> None:
        resp = client.post(
            INVENTORY,
            json={
                "name": "Otra",
                "stock_quantity": 1,
                "unit_price": "1",
                "sale_price": "2",
                "sku": "CAM-001",
            },
        )
        assert resp.status_code == 400

    def test_patch_and_delete(self, client: TestClient, item_a: InventoryItem) -> None:
        resp = client.patch(f"{INVENTORY}/{item_a.id}", json={"stock_quantity": 3})
        assert resp.status_code == 200
        assert resp.json()["stock_quantity"] == 3

        assert client.delete(f"{INVENTORY}/{item_a.id}").status_code == 204
        assert client.get(INVENTORY).json() == []
        assert client.delete(f"{INVENTORY}/{item_a.id}").status_code == 404

    @pytest.mark.parametrize(
        ("changes", "expected"),
        [
            ({"stock_quantity": None}, 400),
            ({"unit_price": None}, 400),
            ({"sale_price": None}, 400),
            ({"name": "  "}, 400),
            ({"stock_quantity": -1}, 422),
            ({"unit_price": "-2"}, 422),
        ],
    )
    def test_invalid_patch_leaves_item_unchanged(
        self, client: TestClient, item_a: InventoryItem, changes: dict, expected: int
    ) -> None:
        resp = client.patch(f"{INVENTORY}/{item_a.id}", json=changes)
        assert resp.status_code == expected

        (item,) = client.get(INVENTORY).json()
        assert item["name"] == "Camiseta básica"
        assert item["stock_quantity"] == 10
        assert Decimal(item["unit_price"]) == Decimal("4.5")
        assert Decimal(item["sale_price"]) == Decimal("9")

    def test_summary_ignores_search(
        self, client: TestClient, item_a: InventoryItem, item_b: InventoryItem
    ) -> None:
        resp = client.get(f"{INVENTORY}/summary")
        assert resp.status_code == 200
        assert resp.json()["inventory"]["item_count"] == 2
