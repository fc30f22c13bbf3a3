from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from reseller_dashboard.config import settings
from reseller_dashboard.models.dashboard_state import DashboardState
from reseller_dashboard.models.item_form import ItemForm
from reseller_dashboard.schemas.product_schema import Category, ItemStatus
from reseller_dashboard.services.pricing import format_amount

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["amount"] = format_amount


def page_context(state: DashboardState, form: ItemForm) -> dict:
    kpis, products, refresh_error, submit_error, loaded = state.current()
    return {
        "kpis": kpis,
        "products": products,
        "loaded": loaded,
        "refresh_error": refresh_error,
        "submit_error": submit_error,
        "form": form.as_dict(),
        "breakeven": form.breakeven,
        "categories": [c.value for c in Category],
        "statuses": [s.value for s in ItemStatus],
        "scene_url": settings.SCENE_URL,
        "placeholder_image": settings.PLACEHOLDER_IMAGE_URL,
    }


def render_page(request: Request, state: DashboardState, form: ItemForm, status_code: int = 200):
    return templates.TemplateResponse(
        request, "dashboard.html", page_context(state, form), status_code=status_code
    )
