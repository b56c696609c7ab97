"""
HTTP API tests.
"""

from zoneinfo import ZoneInfoNotFoundError

import pytest
from fastapi.testclient import TestClient

from app import main
from app.config import settings
from app.errors import StorageFault
from app.main import app
from app.store import store
from scripts.seed_data import seed

client = TestClient(app)


@pytest.fixture(autouse=True)
def seeded_store():
    store.clear()
    seed(store)
    yield
    store.clear()


def post_sale(**fields):
    body = {
        "product": "Laptop",
        "customer": "Acme Corp",
        "amount": "1200",
        "date": "2024-06-15T00:00:00.000Z",
    }
    body.update(fields)
    return client.post("/api/v1/sales", json=body)


class TestListSales:
    def test_unfiltered(self):
        res = client.get("/api/v1/sales")
        assert res.status_code == 200
        body = res.json()
        assert len(body["sales"]) == 5
        assert body["total"] == "3100"
        assert body["by_product"]["Laptop"] == "2700"
        assert body["options"]["customers"] == ["Acme Corp", "Globex Inc", "Stark Industries"]

    def test_newest_first(self):
        dates = [s["date"] for s in client.get("/api/v1/sales").json()["sales"]]
        assert dates[0].startswith("2024-07-10")
        assert dates[-1].startswith("2024-06-15")

    def test_product_filter(self):
        body = client.get("/api/v1/sales", params={"product": "Laptop"}).json()
        assert {s["customer"] for s in body["sales"]} == {"Acme Corp", "Stark Industries"}
        assert body["chart"] == [{"name": "Laptop", "total": "2700"}]

    def test_date_range(self):
        body = client.get(
            "/api/v1/sales",
            params={"date_from": "2024-06-15", "date_to": "2024-06-20"},
        ).json()
        assert [s["product"] for s in body["sales"]] == ["Keyboard", "Laptop"]
        assert body["total"] == "1275"

    def test_unknown_product(self):
        body = client.get("/api/v1/sales", params={"product": "Tablet"}).json()
        assert body["sales"] == []
        assert body["total"] == "0"
        assert body["by_product"] == {}

    def test_bad_query_date(self):
        res = client.get("/api/v1/sales", params={"date_from": "yesterday"})
        assert res.status_code == 422

    def test_options(self):
        body = client.get("/api/v1/sales/options").json()
        assert body["products"] == ["Laptop", "Keyboard", "Monitor", "Mouse"]


class TestAddSale:
    def test_created(self):
        res = post_sale(product="Tablet", customer="Wayne Enterprises", amount="450.50")
        assert res.status_code == 201
        sale = res.json()
        assert sale["id"] == "6"
        assert sale["product"] == "Tablet"
        assert sale["amount"] == "450.50"

        listed = client.get("/api/v1/sales", params={"product": "Tablet"}).json()["sales"]
        assert listed == [sale]

    def test_long_amount_keeps_every_digit(self):
        amount = "9" * 400 + ".5"
        res = post_sale(product="Yacht", amount=amount)
        assert res.status_code == 201
        assert res.json()["amount"] == amount

        listed = client.get("/api/v1/sales", params={"product": "Yacht"})
        assert listed.status_code == 200
        assert listed.json()["sales"][0]["amount"] == amount
        assert client.get("/api/v1/sales").status_code == 200

    def test_client_id_is_ignored(self):
        res = post_sale(id="1")
        assert res.status_code == 201
        assert res.json()["id"] != "1"

    def test_all_field_errors_returned(self):
        res = post_sale(product="L", customer="", amount="-3", date="nope")
        assert res.status_code == 422
        body = res.json()
        assert body["error"] == "Invalid sale data submitted."
        assert [e["field"] for e in body["errors"]] == ["product", "customer", "amount", "date"]
        assert len(client.get("/api/v1/sales").json()["sales"]) == 5

    def test_non_object_body(self):
        res = client.post("/api/v1/sales", json=["Laptop"])
        assert res.status_code == 422
        assert res.json()["errors"] == [{"field": "body", "message": "Expected a JSON object."}]

    def test_storage_fault_is_a_server_error(self, monkeypatch):
        def broken(candidate):
            raise StorageFault("disk unavailable")

        monkeypatch.setattr(main.store, "append", broken)
        res = post_sale()
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to add sale due to a server error."}


class TestAdmin:
    def test_reseed(self):
        post_sale()
        res = client.post("/api/v1/admin/seed")
        assert res.json() == {"status": "seeded", "sales": 5}


class TestStartup:
    def test_seeds_when_enabled(self, monkeypatch):
        monkeypatch.setattr(settings, "seed_on_startup", True)
        store.clear()
        with TestClient(app) as c:
            assert len(store) == 5
            assert c.get("/api/v1/sales").json()["total"] == "3100"

    def test_skips_seed_when_disabled(self, monkeypatch):
        monkeypatch.setattr(settings, "seed_on_startup", False)
        store.clear()
        with TestClient(app) as c:
            assert len(store) == 0
            assert c.get("/api/v1/sales").json()["sales"] == []

    def test_unknown_timezone_stops_startup(self, monkeypatch):
        monkeypatch.setattr(settings, "timezone", "Mars/Olympus")
        with pytest.raises(ZoneInfoNotFoundError):
            with TestClient(app):
                pass
