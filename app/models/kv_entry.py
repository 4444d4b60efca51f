from datetime import datetime
from typing import Any, Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON


class KVEntry(SQLModel, table=True):
    """Single JSON document stored under a well-known key."""

    __tablename__ = "kv_entry"
    key: str = Field(primary_key=True)
    value: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=datetime.utcnow)
