from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Product(SQLModel, table=True):
    # catalog ids are strings ("k001", "t001", ...)
    id: str = Field(primary_key=True)
    name: str
    slug: str = Field(index=True)
    category: str = Field(index=True)
    price_usd: float = 0.0
    description: Optional[str] = None
    is_new: bool = False

    created_at: datetime = Field(default_factory=datetime.utcnow)
