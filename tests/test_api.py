# tests/test_api.py
"""End-to-end tests through the FastAPI app (DB dependency overridden)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch
from conftest import add_motorcycle


class TestUserRoutes:
    def test_update_returns_new_login_id(self, client, owner):
        resp = client.put("/api/v1/user/update", json={
            "userUid": "uid-owner", "updates": {"firstName": "Rahul"},
        })
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "newLoginId": "rahul.kumar@g123"}

    def test_update_unknown_user(self, client):
        resp = client.put("/api/v1/user/update", json={"userUid": "nobody", "updates": {"city": "Pune"}})
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "User not found"}

    def test_malformed_body_is_400(self, client):
        resp = client.put("/api/v1/user/update", json={"updates": {}})
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "userUid" in resp.json()["error"]

    def test_bad_date_is_400(self, client, owner):
        resp = client.put("/api/v1/user/update", json={
            "userUid": "uid-owner", "updates": {"dateOfBirth": "yesterday"},
        })
        assert resp.status_code == 400

    def test_get_user(self, client, owner):
        body = client.get("/api/v1/user/uid-owner").json()
        assert body["user"]["loginId"] == "raj.kumar@g123"


class TestGarageRoutes:
    def test_update_with_comma_list(self, client, owner):
        resp = client.put("/api/v1/garage/update", json={
            "garageId": "G123",
            "updates": {"serviceTypes": "Oil Change, Brake Services", "yearEstablished": 2012},
        })
        assert resp.status_code == 200
        garage = client.get("/api/v1/garage/G123").json()["garage"]
        assert garage["serviceTypes"] == ["Oil Change", "Brake Services"]
        assert garage["yearEstablished"] == "2012"

    def test_validation_error_is_400(self, client, owner):
        resp = client.put("/api/v1/garage/update", json={
            "garageId": "G123", "updates": {"gstin": "12345"},
        })
        assert resp.status_code == 400
        assert resp.json()["error"] == "GSTIN must be exactly 15 characters long"

    def test_validate_field(self, client):
        resp = client.post("/api/v1/garage/validate-field", json={"field": "businessType", "value": "Co-op"})
        assert resp.json() == {"isValid": True, "warning": "Custom business type entered"}


class TestCatalogRoutes:
    def test_leakage_is_409(self, client):
        resp = client.post("/api/v1/motorcycles", json={
            "make": "TVS", "model": "Honda Activa", "yearStart": 2015, "category": "Scooter",
        })
        assert resp.status_code == 409
        assert "Honda" in resp.json()["error"]

    def test_add_then_read(self, client):
        resp = client.post("/api/v1/motorcycles", json={
            "make": "Royal Enfield", "model": "Hunter 350", "yearStart": 2022,
            "category": "Roadster", "engineDisplacementCc": 349,
        })
        assert resp.status_code == 200
        assert resp.json()["motorcycle"]["model"] == "Hunter 350"

        make = client.get("/api/v1/motorcycles/royal-enfield").json()["make"]
        assert make["models"][0]["name"] == "Hunter 350"
        assert client.get("/api/v1/motorcycles/exists",
                          params={"make": "royal enfield", "model": "hunter 350"}).json() == {"exists": True}

    def test_stats(self, client, db):
        add_motorcycle(db, "TVS", "Jupiter")
        assert client.get("/api/v1/motorcycles/stats").json()["totalModels"] == 1


class TestInventoryRoutes:
    def test_create_list_recompute(self, client):
        resp = client.post("/api/v1/inventory", json={
            "garageId": "G123", "partNumber": "OIL-1", "partName": "Engine Oil",
            "onHandStock": 2, "purchasePrice": 100, "sellingPrice": 125,
        })
        assert resp.status_code == 200
        part = resp.json()["part"]
        assert part["status"] == "low-stock"

        listing = client.get("/api/v1/inventory", params={"stock_status": "Low Stock"}).json()
        assert listing["totalCount"] == 1

        summary = client.post("/api/v1/inventory/recompute").json()["summary"]
        assert summary["updated"] == 0

    def test_low_stock_route_not_shadowed_by_part_id(self, client):
        assert client.get("/api/v1/inventory/low-stock").status_code == 200

    def test_missing_part_404(self, client):
        assert client.get("/api/v1/inventory/9999").status_code == 404


class TestCustomerRoutes:
    def test_create_and_search(self, client):
        resp = client.post("/api/v1/customers", json={
            "garageId": "G123", "firstName": "Anita", "lastName": "Rao", "phoneNumber": "9123456780",
            "vehicles": [{"make": "TVS", "model": "Jupiter", "year": 2021, "chassisNumber": "CH-77"}],
        })
        assert resp.status_code == 200
        assert resp.json()["customer"]["vehicles"][0]["licensePlate"] == "CH-77"

        found = client.get("/api/v1/customers/search", params={"garage_id": "G123", "q": "anita"}).json()
        assert found["count"] == 1

        vehicles = client.get("/api/v1/vehicles", params={"garage_id": "G123"}).json()["vehicles"]
        assert vehicles[0]["customerName"] == "Anita Rao"


class TestAmbient:
    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["database"] == "ok"

    def test_unexpected_error_is_generic_500(self, client):
        with patch("garage.routers.motorcycles.catalog_service.get_catalog_stats",
                   side_effect=RuntimeError("secret internals")):
            resp = client.get("/api/v1/motorcycles/stats")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Internal server error"}
