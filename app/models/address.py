from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from uuid import uuid4


class Address(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    label: str = Field(default="Address")
    full_name: str
    phone: str
    line1: str
    line2: str = Field(default="")
    city: str
    state: str
    postal_code: str
    country: str = Field(default="US")
    is_default: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def snapshot(self) -> dict:
        """Frozen copy embedded in a placed order."""
        return {
            "id": self.id,
            "label": self.label,
            "full_name": self.full_name,
            "phone": self.phone,
            "line1": self.line1,
            "line2": self.line2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }
