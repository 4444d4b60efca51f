from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class PlacedOrderItem(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price_usd: float
    line_total_usd: float


class OrderOut(BaseModel):
    id: int
    order_number: str
    status: str
    created_at: datetime
    subtotal_usd: float
    discount_usd: float
    shipping_usd: float
    total_usd: float
    promo_code: Optional[str] = None
    address: dict
    items: List[PlacedOrderItem]


class PlaceOrderResponse(BaseModel):
    ok: bool = True
    order: OrderOut


class OrderHistoryResponse(BaseModel):
    orders: List[OrderOut]
