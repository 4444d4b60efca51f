from sqlmodel import SQLModel, Field


class OrderCounter(SQLModel, table=True):
    __tablename__ = "order_counter"
    name: str = Field(primary_key=True)
    value: int = Field(default=0)
