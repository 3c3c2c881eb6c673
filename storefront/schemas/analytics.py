"""Analytics response schemas."""

from pydantic import BaseModel


class DailySales(BaseModel):
    """Revenue and order count for one calendar day."""

    date: str
    amount: float
    orders: int
