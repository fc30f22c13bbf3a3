from typing import Dict, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from reseller_dashboard.adapters.inventory_backend import BackendError
from reseller_dashboard.api.deps import get_dashboard
from reseller_dashboard.services.dashboard_service import DashboardService, ItemValidationError
from reseller_dashboard.services.pricing import breakeven

router = APIRouter(prefix="/api", tags=["dashboard"])


class FormUpdateIn(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    variant: Optional[str] = None
    category: Optional[str] = None
    purchase_price: Optional[Union[str, int, float]] = None
    purchase_date: Optional[str] = None
    status: Optional[str] = None
    image_url: Optional[str] = None


def _form_out(svc: DashboardService) -> Dict:
    return {"values": svc.form.as_dict(), "breakeven": svc.form.breakeven}


@router.get("/dashboard", summary="Current dashboard state")
def get_state(svc: DashboardService = Depends(get_dashboard)):
    body = svc.state.snapshot()
    body["form"] = _form_out(svc)
    return body


@router.post("/dashboard/refresh", summary="Reload KPIs and products")
def refresh(svc: DashboardService = Depends(get_dashboard)):
    try:
        svc.refresh()
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return svc.state.snapshot()


@router.get("/breakeven", summary="Break-even preview")
def get_breakeven(purchase_price: str = Query("", description="purchase price as entered")):
    return {"purchase_price": purchase_price, "breakeven": breakeven(purchase_price)}


@router.get("/form", summary="Current add-item draft")
def get_form(svc: DashboardService = Depends(get_dashboard)):
    return _form_out(svc)


@router.patch("/form", summary="Change fields of the add-item draft")
def patch_form(payload: FormUpdateIn, svc: DashboardService = Depends(get_dashboard)):
    svc.update_form(payload.model_dump(exclude_unset=True))
    return _form_out(svc)


@router.post("/form/submit", status_code=201, summary="Create a product from the draft")
def submit_form(svc: DashboardService = Depends(get_dashboard)):
    try:
        created = svc.create_product()
    except ItemValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"created": created, "form": _form_out(svc)}
