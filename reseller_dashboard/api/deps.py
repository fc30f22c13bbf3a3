from fastapi import Request

from reseller_dashboard.services.dashboard_service import DashboardService


def get_dashboard(request: Request) -> DashboardService:
    return request.app.state.dashboard
