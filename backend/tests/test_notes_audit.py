"""Tests for notes and the audit log listing."""
from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.models.audit import AuditLog

NOTES = "/api/v1/notes"


class TestNotes:
    def test_crud(self, client: TestClient) -> None:
        created = client.post(NOTES, json={"note_text": " Llamar a José "})
        assert created.status_code == 201
        note = created.json()
        assert note["note_text"] == "Llamar a José"

        updated = client.put(f"{NOTES}/{note['id']}", json={"note_text": "Ya pagó"})
        assert updated.status_code == 200
        assert updated.json()["note_text"] == "Ya pagó"

        assert [n["note_text"] for n in client.get(NOTES).json()] == ["Ya pagó"]

        assert client.delete(f"{NOTES}/{note['id']}").status_code == 204
        assert client.get(NOTES).json() == []

    def test_empty_note_is_422(self, client: TestClient) -> None:
        assert client.post(NOTES, json={"note_text": "   "}).status_code == 422

    def test_missing_note_is_404(self, client: TestClient) -> None:
        missing = "00000000-0000-0000-0000-000000000000"
        resp = client.put(f"{NOTES}/{missing}", json={"note_text": "x"})
        assert resp.status_code == 404
        assert client.delete(f"{NOTES}/{missing}").status_code == 404

    def test_note_changes_are_audited(self, client: TestClient, db: Session) -> None:
        note_id = client.post(NOTES, json={"note_text": "hola"}).json()["id"]
        client.delete(f"{NOTES}/{note_id}")
        actions = {
            a for (a,) in db.query(AuditLog.action).filter(AuditLog.resource_id == note_id)
        }
        assert actions == {"NOTE_CREATED", "NOTE_DELETED"}


class TestAuditLogEndpoint:
    def test_filters(self, client: TestClient) -> None:
        client.post(
            "/api/v1/orders",
            json={
                "order_date": "2024-01-01",
                "customer_name": "Ana",
                "product_description": "Perfume",
                "purchase_price": "40",
                "sale_price": "75",
            },
        )
        client.post(NOTES, json={"note_text": "hola"})

        resp = client.get("/api/v1/audit-logs/", params={"resource_type": "orders"})
        assert resp.status_code == 200
        rows = resp.json()
        assert len(rows) == 1
        assert rows[0]["action"] == "ORDER_CREATED"
        assert rows[0]["changes"]["customer"] == "Ana"

        notes = client.get("/api/v1/audit-logs/", params={"action": "NOTE_CREATED"}).json()
        assert [r["resource_type"] for r in notes] == ["notes"]
