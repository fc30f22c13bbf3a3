from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from reseller_dashboard.config import settings
from reseller_dashboard.schemas.product_schema import KpiSnapshot, Product
from reseller_dashboard.utils.log import get_logger

log = get_logger("inventory_backend", "BACKEND")


class BackendError(Exception):
    """Base class for anything that went wrong talking to the inventory backend."""


class BackendUnavailable(BackendError):
    """Raised for transport failures: refused connection, DNS, timeout."""


class BackendStatusError(BackendError):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, method: str, url: str, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{method} {url} returned HTTP {status_code}")


class BackendResponseError(BackendError):
    """Raised when a response body is not JSON or doesn't match the expected shape."""


class InventoryClient:
    """
    Thin client for the inventory backend.

    `session` only needs requests-style get/post methods returning objects
    with `status_code`, `text` and `json()`; a plain requests.Session is
    used when none is given.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session=None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.request_timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs):
        url = self._url(path)
        send = getattr(self.session, method.lower())
        try:
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            res = send(url, **kwargs)
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise BackendUnavailable(f"{method} {url} failed: {e}") from e
        if not 200 <= res.status_code < 300:
            log.warning("%s %s -> %s", method, url, res.status_code)
            raise BackendStatusError(method, url, res.status_code, res.text)
        log.debug("%s %s -> %s", method, url, res.status_code)
        return res

    def _json(self, res, what: str) -> Any:
        try:
            return res.json()
        except ValueError as e:
            raise BackendResponseError(f"{what}: response is not JSON") from e

    def list_products(self) -> List[Product]:
        res = self._request("GET", "/products")
        body = self._json(res, "products")
        if not isinstance(body, list):
            raise BackendResponseError("products: expected a JSON array")
        try:
            # keep the backend's order
            return [Product.model_validate(p) for p in body]
        except ValidationError as e:
            raise BackendResponseError(f"products: {e.error_count()} invalid field(s)") from e

    def get_kpis(self) -> KpiSnapshot:
        res = self._request("GET", "/analytics/kpis")
        body = self._json(res, "kpis")
        try:
            return KpiSnapshot.model_validate(body)
        except ValidationError as e:
            raise BackendResponseError(f"kpis: {e.error_count()} invalid field(s)") from e

    def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a new product. Any 2xx counts as success; the created record is
        returned when the backend sends one, otherwise an empty dict.
        """
        res = self._request("POST", "/products", json=payload)
        try:
            body = res.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def health_check(self) -> bool:
        try:
            self._request("GET", "/analytics/kpis")
            return True
        except BackendError:
            return False
