import json
from urllib.parse import urlparse

import pytest
import requests
from fastapi.testclient import TestClient

from reseller_dashboard.adapters.inventory_backend import InventoryClient
from reseller_dashboard.main import create_app

BASE = "http://backend.test"

SEED_PRODUCTS = [
    {
        "id": "p-1",
        "name": "Jordan 1 Chicago",
        "sku": "555088-101",
        "variant": "US 10",
        "category": "Sneaker",
        "purchase_price": 180.0,
        "purchase_date": "2024-03-01T00:00:00.000Z",
        "status": "Listed",
        "image_url": "https://img.test/j1.png",
    },
    {
        "id": "p-2",
        "name": "Charizard Base Set",
        "category": "TCG",
        "purchase_price": 250.5,
        "purchase_date": "2024-04-12T09:30:00.000Z",
        "status": "In Stock",
    },
]

SEED_KPIS = {
    "total_investment": 430.5,
    "total_value": 512.0,
    "realized_profit": 42.125,
    "roi": 9.75,
    "sold_count": 3,
}


class FakeResponse:
    def __init__(self, status_code: int, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return self._body


class FakeBackend:
    """
    In-memory stand-in for the inventory backend with a requests-style
    get/post surface. Flip `fail` to make a path misbehave:
    "down" raises a ConnectionError, an int answers with that status,
    "garbage" answers 200 with a non-JSON body.
    """

    def __init__(self):
        self.products = [dict(p) for p in SEED_PRODUCTS]
        self.kpis = dict(SEED_KPIS)
        self.fail = {}
        self.posted = []
        self.calls = []

    def _failure(self, path):
        mode = self.fail.get(path)
        if mode == "down":
            raise requests.ConnectionError(f"connection refused: {path}")
        if isinstance(mode, int):
            return FakeResponse(mode, {"detail": "boom"})
        if mode == "garbage":
            return FakeResponse(200, text="<html>oops</html>")
        return None

    def get(self, url, **kwargs):
        path = urlparse(url).path
        self.calls.append(("GET", path))
        failed = self._failure(path)
        if failed is not None:
            return failed
        if path == "/products":
            return FakeResponse(200, list(self.products))
        if path == "/analytics/kpis":
            return FakeResponse(200, dict(self.kpis))
        return FakeResponse(404, {"detail": "Not Found"})

    def post(self, url, json=None, **kwargs):
        path = urlparse(url).path
        self.calls.append(("POST", path))
        failed = self._failure(path)
        if failed is not None:
            return failed
        record = dict(json, id=f"p-{len(self.products) + 1}")
        self.posted.append(json)
        self.products.append(record)
        return FakeResponse(201, record)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def inventory_client(backend):
    return InventoryClient(base_url=BASE, session=backend, timeout=5)


@pytest.fixture
def app(inventory_client):
    return create_app(client=inventory_client)


@pytest.fixture
def client(app):
    return TestClient(app)
