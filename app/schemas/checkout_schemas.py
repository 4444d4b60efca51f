# app/schemas/checkout_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List


class CartLineIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # normalize_cart_lines drops or coerces bad values
    product_id: Any = Field(None, alias="productId")
    quantity: Any = None   # floored and clamped to >= 1


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: Any = []       # list of CartLineIn-shaped entries
    address_id: Any = Field(None, alias="addressId")
    promo_code: Any = Field(None, alias="promoCode")


class CartLine(BaseModel):
    product_id: str
    quantity: int


class PricedLine(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price_usd: float
    line_total_usd: float


class PriceResult(BaseModel):
    items: List[PricedLine]
    subtotal_usd: float       # sum of line_total_usd
    base_shipping_usd: float  # flat fee when subtotal > 0
    discount_usd: float
    shipping_usd: float       # promo override or base_shipping_usd
    total_usd: float          # subtotal - discount + shipping
    applied_code: str
