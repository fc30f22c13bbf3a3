from typing import Optional

from fastapi import FastAPI

from reseller_dashboard.adapters.inventory_backend import InventoryClient
from reseller_dashboard.api.health import router as health_router
from reseller_dashboard.api.routes_dashboard import router as dashboard_router
from reseller_dashboard.api.routes_pages import router as pages_router
from reseller_dashboard.config import settings
from reseller_dashboard.services.dashboard_service import DashboardService
from reseller_dashboard.utils.log import get_logger

log = get_logger("app", "APP")


def create_app(client: Optional[InventoryClient] = None) -> FastAPI:
    app = FastAPI(title="Reseller Dashboard", version="0.1.0")
    client = client or InventoryClient()
    app.state.dashboard = DashboardService(client)
    log.info("inventory backend: %s", client.base_url)

    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(dashboard_router)
    app.include_router(pages_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
