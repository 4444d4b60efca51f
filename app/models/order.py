from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import List, Optional
from datetime import datetime

from app.models.order_item import OrderItem


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_number: str = Field(index=True, unique=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    # frozen copy, the address book entry may change or disappear later
    address_id: str
    address: dict = Field(default_factory=dict, sa_column=Column(JSON))

    subtotal_usd: float
    discount_usd: float = 0.0
    shipping_usd: float
    total_usd: float
    promo_code: Optional[str] = None

    status: str = Field(default="pending")

    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)

    items: List["OrderItem"] = Relationship(back_populates="order")
