from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


class TestProducts:
    def test_grouped_by_category(self, client):
        data = client.get("/api/v1/lending/products").json()
        assert data["total_products"] == 51
        assert set(data["products"]) == {"residential", "commercial", "business", "specialty"}
        ids = [p["id"] for p in data["products"]["residential"]]
        assert "dscr" in ids
        assert "fix_flip" in ids
        assert len(data["products"]["business"]) == 12
        assert len(data["products"]["specialty"]) == 12

    def test_featured_products(self, client):
        data = client.get("/api/v1/lending/products").json()
        assert {"dscr", "fix_flip", "sba_7a", "hfci", "cannabis"} <= set(data["highlighted"])
        assert "equipment" not in data["highlighted"]

    def test_product_features(self, client):
        data = client.get("/api/v1/lending/products/fix_flip").json()
        assert "Draw schedule" in data["features"]
        assert data["highlight"] is True

    def test_single_product(self, client):
        resp = client.get("/api/v1/lending/products/sba_7a")
        assert resp.status_code == 200
        data = resp.json()
        assert data["rate"] == "Prime + 2.25%"
        assert data["min_rate"] is None

    def test_unknown_product(self, client):
        assert client.get("/api/v1/lending/products/timeshare").status_code == 404


class TestCalculate:
    def test_warning_scenario(self, client):
        resp = client.post("/api/v1/lending/calculate", json={
            "product_id": "dscr",
            "loan_amount": "500000",
            "property_value": "550000",
            "credit_score": 600,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["warnings"] == [
            "LTV of 90.9% exceeds max of 80%",
            "Credit score 600 below minimum of 660",
        ]
        assert Decimal(data["calculations"]["ltv"]) == Decimal("90.9091")
        assert Decimal(data["loan_limits"]["max_ltv"]) == Decimal("80")
        assert data["flip_analysis"] is None

    def test_fix_flip(self, client):
        data = client.post("/api/v1/lending/calculate", json={
            "product_id": "fix_flip",
            "loan_amount": "200000",
            "credit_score": 760,
            "purchase_price": "200000",
            "rehab_budget": "50000",
            "after_repair_value": "400000",
        }).json()
        assert data["term_unit"] == "months"
        assert Decimal(data["calculations"]["ltc"]) == Decimal("80")
        assert Decimal(data["flip_analysis"]["profit"]) > 0
        assert Decimal(data["inputs"]["selling_costs_pct"]) == Decimal("8")

    def test_unknown_loan_type(self, client):
        resp = client.post("/api/v1/lending/calculate", json={
            "product_id": "timeshare",
            "loan_amount": "100000",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid loan type"

    def test_equipment(self, client):
        resp = client.post("/api/v1/lending/calculate", json={
            "product_id": "equipment",
            "loan_amount": "250000",
            "property_value": "250000",
            "term": 5,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["product_name"] == "Equipment Financing"
        assert data["term_unit"] == "years"
        assert Decimal(data["calculations"]["ltv"]) == Decimal("100")
        assert data["warnings"] == []

    def test_oversized_amount_rejected(self, client):
        resp = client.post("/api/v1/lending/calculate", json={
            "product_id": "dscr",
            "loan_amount": "1e30",
        })
        assert resp.status_code == 400
        assert "loan_amount must not exceed" in resp.json()["detail"]

    def test_blank_product_rejected(self, client):
        resp = client.post("/api/v1/lending/calculate", json={"product_id": "", "loan_amount": "1"})
        assert resp.status_code == 400

    def test_credit_score_range(self, client):
        resp = client.post("/api/v1/lending/calculate", json={
            "product_id": "dscr",
            "loan_amount": "100000",
            "credit_score": 900,
        })
        assert resp.status_code == 422


class TestSchedule:
    def test_partial_schedule(self, client):
        data = client.post("/api/v1/lending/schedule", json={
            "principal": "400000",
            "annual_rate": "7",
            "term_years": 30,
            "periods": 24,
        }).json()
        assert Decimal(data["monthly_payment"]) == Decimal("2661.21")
        assert len(data["payments"]) == 24
        assert [y["year"] for y in data["yearly"]] == [1, 2]
        assert Decimal(data["payments"][0]["interest"]) == Decimal("2333.33")

    def test_oversized_principal_rejected(self, client):
        resp = client.post("/api/v1/lending/schedule", json={
            "principal": "1e30",
            "annual_rate": "7",
        })
        assert resp.status_code == 422

    def test_oversized_term_rejected(self, client):
        resp = client.post("/api/v1/lending/schedule", json={
            "principal": "400000",
            "annual_rate": "7",
            "term_years": 1000000000,
        })
        assert resp.status_code == 422
