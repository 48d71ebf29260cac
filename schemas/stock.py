from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class StockUpdate(BaseModel):
    quantity: int = Field(..., description="Negative values are stored as 0")


class StockResponse(BaseModel):
    branch_id: str
    menu_item_id: int
    quantity: int
    in_stock: bool
    last_updated: Optional[datetime] = None

    class Config:
        from_attributes = True
