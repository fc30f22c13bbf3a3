import threading
from datetime import datetime, timezone
from typing import List, Optional

from reseller_dashboard.schemas.product_schema import KpiSnapshot, Product


class DashboardState:
    """
    Last applied backend data plus the outcome of the latest refresh.
    KPIs and products are only ever replaced together.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.kpis: Optional[KpiSnapshot] = None
        self.products: List[Product] = []
        self.refreshed_at: Optional[datetime] = None
        self.refresh_error: Optional[str] = None
        self.submit_error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.refreshed_at is not None

    def apply(self, kpis: KpiSnapshot, products: List[Product]) -> None:
        with self._lock:
            self.kpis = kpis
            self.products = list(products)
            self.refreshed_at = datetime.now(timezone.utc)
            self.refresh_error = None

    def mark_refresh_failed(self, message: str) -> None:
        # keep last-known-good data, only record the failure
        with self._lock:
            self.refresh_error = message

    def set_submit_error(self, message: Optional[str]) -> None:
        with self._lock:
            self.submit_error = message

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "loaded": self.loaded,
                "kpis": self.kpis.model_dump() if self.kpis else None,
                "products": [p.model_dump(mode="json") for p in self.products],
                "refreshed_at": self.refreshed_at.isoformat() if self.refreshed_at else None,
                "refresh_error": self.refresh_error,
                "submit_error": self.submit_error,
            }

    def current(self):
        """(kpis, products, refresh_error, submit_error, loaded) read in one consistent step."""
        with self._lock:
            return (
                self.kpis,
                list(self.products),
                self.refresh_error,
                self.submit_error,
                self.loaded,
            )
