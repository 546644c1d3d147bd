from fastapi.testclient import TestClient
from sqlalchemy import MetaData

from app.config import settings
from app.models.user import User, UserRole
from main import app as fastapi_app


def test_root(client):
    resp = client.get("/api/")
    assert resp.status_code == 200
    assert resp.json() == "Courier Track API"


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["database"] is True
    assert "timestamp" in body


def test_routes_mounted_under_api():
    paths = fastapi_app.openapi()["paths"]
    assert "/api/shipments" in paths
    assert "/api/shipments/track/{consignee_number}" in paths
    assert "/api/shipments/{shipment_id}/status" in paths
    assert "/api/auth/login" in paths
    assert "/api/users/{user_id}/password" in paths


def test_startup_creates_tables_once_and_seeds_admin(db, monkeypatch):
    calls = []
    original = MetaData.create_all

    def counting_create_all(self, *args, **kwargs):
        calls.append(self)
        return original(self, *args, **kwargs)

    monkeypatch.setattr(MetaData, "create_all", counting_create_all)

    with TestClient(fastapi_app) as client:
        assert client.get("/api/health").status_code == 200

    assert len(calls) == 1
    admin = db.query(User).filter(User.email == settings.seed_admin_email).one()
    assert admin.role == UserRole.ADMIN
