"""
Tests for the FastAPI endpoints, run against the seeded in-memory store.
"""

import pytest
from fastapi.testclient import TestClient

from sales_report.main import app


# ── fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        c.post("/api/v1/admin/seed")
        yield c


def example_payload():
    return {
        "sellers": [{"id": 1, "first_name": "A", "last_name": "B"}],
        "products": [{"sku": "X", "purchase_price": 10}],
        "purchase_records": [{
            "seller_id": 1,
            "customer_id": 9,
            "date": "2024-01-01",
            "total_amount": 100,
            "total_discount": 0,
            "items": [{"sku": "X", "quantity": 2, "sale_price": 50, "discount": 0}],
        }],
    }


# ── tests ─────────────────────────────────────────────────────────────────────

class TestReferenceData:
    def test_list_sellers(self, client):
        resp = client.get("/api/v1/sellers")
        assert resp.status_code == 200
        assert len(resp.json()["sellers"]) == 5

    def test_get_seller(self, client):
        resp = client.get("/api/v1/sellers/seller_1")
        assert resp.status_code == 200
        assert resp.json()["first_name"] == "Alexey"

    def test_unknown_seller_is_404(self, client):
        assert client.get("/api/v1/sellers/nobody").status_code == 404

    def test_list_products(self, client):
        resp = client.get("/api/v1/products")
        assert resp.status_code == 200
        assert len(resp.json()["products"]) == 20


class TestStoredReport:
    def test_report_covers_every_seller(self, client):
        report = client.get("/api/v1/reports/sales").json()["report"]
        assert len(report) == 5
        assert sum(r["sales_count"] for r in report) == 400

    def test_report_is_ordered_by_profit(self, client):
        report = client.get("/api/v1/reports/sales").json()["report"]
        profits = [r["profit"] for r in report]
        assert profits == sorted(profits, reverse=True)

    def test_report_shape(self, client):
        entry = client.get("/api/v1/reports/sales").json()["report"][0]
        assert set(entry) == {
            "seller_id", "name", "revenue", "profit", "sales_count", "top_products", "bonus",
        }
        assert len(entry["top_products"]) <= 10


class TestPostedReport:
    def test_example_payload(self, client):
        resp = client.post("/api/v1/reports/sales", json=example_payload())
        assert resp.status_code == 200
        [entry] = resp.json()["report"]
        assert entry["seller_id"] == 1
        assert entry["name"] == "A B"
        assert entry["revenue"] == 100.0
        assert entry["profit"] == 80.0
        assert entry["sales_count"] == 1
        assert entry["top_products"] == [{"sku": "X", "quantity": 2}]
        assert entry["bonus"] == 12.0

    def test_invalid_structure(self, client):
        payload = example_payload()
        payload["sellers"] = "not a list"
        resp = client.post("/api/v1/reports/sales", json=payload)
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "InvalidStructure"

    def test_empty_input(self, client):
        payload = example_payload()
        payload["purchase_records"] = []
        resp = client.post("/api/v1/reports/sales", json=payload)
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "EmptyInput"

    def test_unknown_seller_record_is_dropped(self, client):
        payload = example_payload()
        orphan = dict(payload["purchase_records"][0], seller_id=99)
        payload["purchase_records"].append(orphan)
        resp = client.post("/api/v1/reports/sales", json=payload)
        assert resp.status_code == 200
        assert resp.json()["report"][0]["sales_count"] == 1


class TestStatistics:
    def test_seller_statistics(self, client):
        resp = client.get("/api/v1/sellers/seller_1/statistics")
        assert resp.status_code == 200
        body = resp.json()
        assert body["seller_id"] == "seller_1"
        assert body["sales_count"] == sum(body["transactions_by_month"].values())
        assert 0 < body["customer_count"] <= 60
        assert body["unique_products_count"] <= 20

    def test_months_are_sorted(self, client):
        months = list(client.get("/api/v1/sellers/seller_2/statistics").json()["transactions_by_month"])
        assert months == sorted(months)
        assert all(m.startswith(("2025-", "2026-")) for m in months)

    def test_unknown_seller_is_404(self, client):
        assert client.get("/api/v1/sellers/nobody/statistics").status_code == 404


class TestAdmin:
    def test_reseed_is_deterministic(self, client):
        before = client.get("/api/v1/reports/sales").json()
        resp = client.post("/api/v1/admin/seed")
        assert resp.json() == {
            "status": "seeded",
            "sellers": 5,
            "products": 20,
            "purchase_records": 400,
        }
        assert client.get("/api/v1/reports/sales").json() == before
