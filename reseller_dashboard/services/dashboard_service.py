from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

from pydantic import ValidationError

from reseller_dashboard.adapters.inventory_backend import BackendError, InventoryClient
from reseller_dashboard.models.dashboard_state import DashboardState
from reseller_dashboard.models.item_form import ItemForm
from reseller_dashboard.schemas.product_schema import ProductCreate
from reseller_dashboard.utils.log import get_logger

log = get_logger("dashboard", "DASHBOARD")


class DashboardException(Exception):
    pass


class ItemValidationError(DashboardException):
    """Form input rejected before anything was sent to the backend."""


class DashboardService:
    """
    Owns the dashboard's view state and the add-item draft, and keeps both
    in sync with the inventory backend.
    """

    def __init__(self, client: InventoryClient):
        self.client = client
        self.state = DashboardState()
        self.form = ItemForm()

    def refresh(self) -> None:
        """
        Fetch products and KPIs concurrently and apply both at once.
        On any failure the previous data stays and the error is recorded,
        then the BackendError is re-raised.
        """
        with ThreadPoolExecutor(max_workers=2) as ex:
            kpis_future = ex.submit(self.client.get_kpis)
            products_future = ex.submit(self.client.list_products)
            try:
                kpis = kpis_future.result()
                products = products_future.result()
            except BackendError as e:
                log.warning("refresh failed, keeping previous data: %s", e)
                self.state.mark_refresh_failed(str(e))
                raise
        self.state.apply(kpis, products)
        log.info("refreshed: %d product(s)", len(products))

    def update_form(self, values: Dict[str, Any]) -> ItemForm:
        try:
            self.form.update(values)
        except KeyError as e:
            raise ItemValidationError(str(e.args[0])) from e
        return self.form

    def create_product(self, values: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Submit the draft (merged with `values`, if given).

        On success the draft is reset and the dashboard refreshed once.
        On failure the draft keeps every entered value, the error is
        recorded for display and the exception propagates.
        """
        if values:
            self.update_form(values)
        try:
            item = ProductCreate.model_validate(self.form.to_payload())
        except (ValidationError, ValueError) as e:
            msg = _describe_invalid(e)
            self.state.set_submit_error(msg)
            raise ItemValidationError(msg) from e

        try:
            created = self.client.create_product(item.to_payload())
        except BackendError as e:
            log.warning("create failed, keeping form values: %s", e)
            self.state.set_submit_error(f"Item konnte nicht gespeichert werden: {e}")
            raise

        log.info("created product %r", item.name)
        self.state.set_submit_error(None)
        self.form.reset()
        try:
            self.refresh()
        except BackendError:
            # the item exists; the stale-data banner covers the failed reload
            pass
        return created


def _describe_invalid(e: Exception) -> str:
    if isinstance(e, ValidationError):
        parts = []
        for err in e.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
        return "; ".join(parts)
    return str(e)
