import threading

import pytest

from reseller_dashboard.adapters.inventory_backend import BackendStatusError, BackendUnavailable
from reseller_dashboard.models.item_form import FORM_DEFAULTS
from reseller_dashboard.services.dashboard_service import DashboardService, ItemValidationError


@pytest.fixture
def svc(inventory_client):
    return DashboardService(inventory_client)


ENTERED = {
    "name": "Supreme Box Logo",
    "sku": "",
    "variant": "L",
    "category": "Streetwear",
    "purchase_price": "320",
    "purchase_date": "2024-05-01",
    "status": "Listed",
    "image_url": "",
}


def test_refresh_applies_kpis_and_products(svc):
    svc.refresh()
    assert svc.state.loaded
    assert svc.state.kpis.total_investment == 430.5
    assert [p.id for p in svc.state.products] == ["p-1", "p-2"]
    assert svc.state.refresh_error is None


def test_refresh_failure_keeps_last_known_good(svc, backend):
    svc.refresh()
    backend.fail["/analytics/kpis"] = 503
    backend.products.append(dict(backend.products[0], id="p-9"))
    with pytest.raises(BackendStatusError):
        svc.refresh()
    # products fetched fine, but nothing is applied when the other half fails
    assert [p.id for p in svc.state.products] == ["p-1", "p-2"]
    assert svc.state.kpis.sold_count == 3
    assert "503" in svc.state.refresh_error


def test_refresh_failure_without_data_is_not_empty_success(svc, backend):
    backend.fail["/products"] = "down"
    with pytest.raises(BackendUnavailable):
        svc.refresh()
    assert not svc.state.loaded
    assert svc.state.kpis is None
    assert svc.state.refresh_error


class SlowKpisClient:
    """Products answer at once, KPIs wait until released."""

    def __init__(self, inner):
        self.inner = inner
        self.products_done = threading.Event()
        self.release_kpis = threading.Event()

    def list_products(self):
        products = self.inner.list_products()
        self.products_done.set()
        return products

    def get_kpis(self):
        assert self.release_kpis.wait(5)
        return self.inner.get_kpis()


def test_refresh_waits_for_both_before_applying(inventory_client):
    slow = SlowKpisClient(inventory_client)
    svc = DashboardService(slow)
    worker = threading.Thread(target=svc.refresh)
    worker.start()
    try:
        assert slow.products_done.wait(5)
        assert svc.state.products == []
        assert svc.state.kpis is None
        assert not svc.state.loaded
    finally:
        slow.release_kpis.set()
        worker.join(5)
    assert len(svc.state.products) == 2
    assert svc.state.kpis is not None


def test_create_product_success_resets_form_and_refreshes_once(svc, backend, monkeypatch):
    calls = []
    original = svc.refresh

    def counting_refresh():
        calls.append(1)
        original()

    monkeypatch.setattr(svc, "refresh", counting_refresh)
    created = svc.create_product(ENTERED)

    assert calls == [1]
    assert created["name"] == "Supreme Box Logo"
    assert svc.form.as_dict() == FORM_DEFAULTS
    assert svc.state.submit_error is None
    assert svc.state.products[-1].name == "Supreme Box Logo"


def test_create_product_payload(svc, backend):
    svc.create_product(ENTERED)
    sent = backend.posted[0]
    assert "sku" not in sent
    assert "image_url" not in sent
    assert sent["variant"] == "L"
    assert sent["purchase_price"] == 320.0
    assert sent["purchase_date"] == "2024-05-01T00:00:00.000Z"


def test_create_product_failure_keeps_values(svc, backend):
    backend.fail["/products"] = 500
    with pytest.raises(BackendStatusError):
        svc.create_product(ENTERED)
    assert svc.form.as_dict() == ENTERED
    assert "500" in svc.state.submit_error
    assert ("GET", "/products") not in backend.calls


def test_blank_name_is_rejected_before_sending(svc, backend):
    with pytest.raises(ItemValidationError):
        svc.create_product(dict(ENTERED, name="   "))
    assert backend.posted == []
    assert svc.form.values["variant"] == "L"
    assert svc.state.submit_error


def test_unknown_category_is_rejected(svc, backend):
    with pytest.raises(ItemValidationError):
        svc.create_product(dict(ENTERED, category="Watches"))
    assert backend.posted == []


def test_unknown_form_field(svc):
    with pytest.raises(ItemValidationError):
        svc.update_form({"colour": "red"})


@pytest.mark.parametrize("price", ["1e400", "inf", "nan"])
def test_non_finite_price_is_rejected_before_sending(svc, backend, price):
    with pytest.raises(ItemValidationError):
        svc.create_product(dict(ENTERED, purchase_price=price))
    assert backend.posted == []
    assert svc.form.values["purchase_price"] == price
    assert svc.state.submit_error


def test_submit_error_is_written_under_the_state_lock(svc):
    svc.state._lock.acquire()
    writer = threading.Thread(target=svc.state.set_submit_error, args=("boom",))
    try:
        writer.start()
        writer.join(0.2)
        assert writer.is_alive()
        assert svc.state.submit_error is None
    finally:
        svc.state._lock.release()
    writer.join(5)
    assert svc.state.snapshot()["submit_error"] == "boom"
