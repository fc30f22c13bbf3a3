from fastapi import APIRouter, Depends

from reseller_dashboard.api.deps import get_dashboard
from reseller_dashboard.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/health", tags=["health"])
def health(svc: DashboardService = Depends(get_dashboard)):
    backend_ok = svc.client.health_check()
    return {
        "status": "ok" if backend_ok else "degraded",
        "backend": backend_ok,
    }
