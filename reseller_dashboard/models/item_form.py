from datetime import date, datetime, time, timezone
from typing import Dict, Optional

from reseller_dashboard.schemas.product_schema import Category, ItemStatus
from reseller_dashboard.services.pricing import breakeven, parse_amount

FORM_DEFAULTS: Dict[str, str] = {
    "name": "",
    "sku": "",
    "variant": "",
    "category": Category.SNEAKER.value,
    "purchase_price": "",
    "purchase_date": "",
    "status": ItemStatus.IN_STOCK.value,
    "image_url": "",
}

OPTIONAL_FIELDS = ("sku", "variant", "image_url")


def iso_timestamp(dt: datetime) -> str:
    """UTC timestamp with millisecond precision and a trailing Z."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def normalize_purchase_date(value: str, now: Optional[datetime] = None) -> str:
    """
    A date-only value ("2024-05-01") becomes UTC midnight of that day;
    a full timestamp is kept; blank means the time of submission.
    """
    value = (value or "").strip()
    if not value:
        return iso_timestamp(now or datetime.now(timezone.utc))
    try:
        day = date.fromisoformat(value)
        return iso_timestamp(datetime.combine(day, time(0, 0), tzinfo=timezone.utc))
    except ValueError:
        pass
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return iso_timestamp(dt)


class ItemForm:
    """Draft of the "add item" form. Every field holds the raw text entered."""

    def __init__(self, **values: str):
        self.values: Dict[str, str] = dict(FORM_DEFAULTS)
        self.update(values)

    def update(self, values: Dict[str, object]) -> None:
        for k, v in values.items():
            if k not in FORM_DEFAULTS:
                raise KeyError(f"unknown form field: {k}")
            self.values[k] = "" if v is None else str(v)

    def reset(self) -> None:
        self.values = dict(FORM_DEFAULTS)

    def is_pristine(self) -> bool:
        return self.values == FORM_DEFAULTS

    @property
    def breakeven(self) -> str:
        return breakeven(self.values["purchase_price"])

    def to_payload(self, now: Optional[datetime] = None) -> Dict[str, object]:
        """
        Build the POST body: numeric price, full timestamp, and no keys for
        optional fields left blank. Raises ValueError on an unparseable date.
        """
        payload: Dict[str, object] = dict(self.values)
        payload["purchase_price"] = parse_amount(self.values["purchase_price"])
        payload["purchase_date"] = normalize_purchase_date(self.values["purchase_date"], now)
        return {
            k: v for k, v in payload.items() if not (k in OPTIONAL_FIELDS and v == "")
        }

    def as_dict(self) -> Dict[str, str]:
        return dict(self.values)
