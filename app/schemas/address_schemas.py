from pydantic import BaseModel
from typing import Optional


class AddressCreate(BaseModel):
    label: Optional[str] = None
    full_name: str = ""
    phone: str = ""
    line1: str = ""
    line2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    is_default: bool = False


