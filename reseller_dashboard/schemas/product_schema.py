# reseller_dashboard/schemas/product_schema.py
import enum
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, enum.Enum):
    SNEAKER = "Sneaker"
    TCG = "TCG"
    STREETWEAR = "Streetwear"


class ItemStatus(str, enum.Enum):
    IN_STOCK = "In Stock"
    LISTED = "Listed"
    SOLD = "Sold"


class Product(BaseModel):
    """A product record as returned by the inventory backend."""

    model_config = ConfigDict(extra="ignore")
    id: Union[int, str]
    name: str
    sku: Optional[str] = None
    variant: Optional[str] = None
    category: Category
    purchase_price: float
    purchase_date: Optional[datetime] = None
    status: ItemStatus
    image_url: Optional[str] = None


class ProductCreate(BaseModel):
    """
    Payload for POST /products. Optional text fields are None when blank
    and are dropped from the serialized body, never sent as "".
    """

    name: str = Field(min_length=1)
    sku: Optional[str] = None
    variant: Optional[str] = None
    category: Category = Category.SNEAKER
    purchase_price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    purchase_date: str
    status: ItemStatus = ItemStatus.IN_STOCK
    image_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @field_validator("sku", "variant", "image_url")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class KpiSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")
    total_investment: float
    total_value: float
    realized_profit: float
    roi: float
    sold_count: int = Field(ge=0)
