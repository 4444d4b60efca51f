# app/schemas/promo_schemas.py
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

PromoType = Literal["percent", "fixed", "free_shipping"]


class PromoRule(BaseModel):
    code: str
    label: str
    description: str = ""
    active: bool = True
    type: PromoType = "percent"
    value: float = 0.0
    min_subtotal: float = 0.0
    max_discount: float = 0.0   # 0 means uncapped
    created_at: str
    updated_at: str

    def to_store(self) -> dict:
        """Shape written under the promo store key."""
        return {
            "code": self.code,
            "label": self.label,
            "description": self.description,
            "active": self.active,
            "type": self.type,
            "value": self.value,
            "minSubtotal": self.min_subtotal,
            "maxDiscount": self.max_discount,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


class PromoApplyResult(BaseModel):
    discount_usd: float = 0.0
    # None: keep the caller's baseline shipping; any number replaces it
    shipping_override_usd: Optional[float] = None
    applied_code: str = ""


class PublicPromo(BaseModel):
    code: str
    label: str
    description: str
    type: PromoType
    value: float
    min_subtotal: float
    max_discount: float


class PromoInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    active: Optional[bool] = None
    type: Optional[str] = None
    value: Optional[float] = None
    min_subtotal: Optional[float] = Field(None, alias="minSubtotal")
    max_discount: Optional[float] = Field(None, alias="maxDiscount")
