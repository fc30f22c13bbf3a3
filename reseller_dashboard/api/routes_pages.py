from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from reseller_dashboard.adapters.inventory_backend import BackendError
from reseller_dashboard.api.deps import get_dashboard
from reseller_dashboard.services.dashboard_service import DashboardService, ItemValidationError
from reseller_dashboard.views.dashboard_page import render_page

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def dashboard_page(request: Request, svc: DashboardService = Depends(get_dashboard)):
    # every page load reloads, stale data + banner on failure
    try:
        svc.refresh()
    except BackendError:
        pass
    return render_page(request, svc.state, svc.form)


@router.post("/", response_class=HTMLResponse)
def submit_item(
    request: Request,
    name: str = Form(""),
    sku: str = Form(""),
    variant: str = Form(""),
    category: str = Form("Sneaker"),
    purchase_price: str = Form(""),
    purchase_date: str = Form(""),
    status: str = Form("In Stock"),
    image_url: str = Form(""),
    svc: DashboardService = Depends(get_dashboard),
):
    values = {
        "name": name,
        "sku": sku,
        "variant": variant,
        "category": category,
        "purchase_price": purchase_price,
        "purchase_date": purchase_date,
        "status": status,
        "image_url": image_url,
    }
    status_code = 200
    try:
        svc.create_product(values)
    except ItemValidationError:
        status_code = 422
    except BackendError:
        status_code = 502
    return render_page(request, svc.state, svc.form, status_code=status_code)
