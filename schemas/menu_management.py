from pydantic import BaseModel, root_validator, Field
from typing import Optional, List
from datetime import datetime


class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = ""
    price: float = Field(..., gt=0)
    base_price: Optional[float] = Field(None, gt=0)
    category: str = Field(..., min_length=1)
    image: Optional[str] = None
    is_available: Optional[bool] = True


class MenuItemCreate(MenuItemBase):
    seasonal_menu_id: Optional[int] = None


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    base_price: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    is_available: Optional[bool] = None


class MenuItemResponse(MenuItemBase):
    id: int
    base_price: float
    is_available: bool
    seasonal_menu_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SeasonalAssignment(BaseModel):
    seasonal_menu_id: int


class SeasonalMenuBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = ""
    start_date: str
    end_date: str
    start_time: str
    end_time: str
    is_active: Optional[bool] = True

    @root_validator(skip_on_failure=True)
    def validate_date_order(cls, values):
        start_date = values.get("start_date")
        end_date = values.get("end_date")
        if start_date and end_date and start_date > end_date:
            raise ValueError("start_date must not be after end_date")
        return values


class SeasonalMenuCreate(SeasonalMenuBase):
    pass


class SeasonalMenuUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_active: Optional[bool] = None


class SeasonalMenuResponse(SeasonalMenuBase):
    id: int
    is_active: bool
    items: List[MenuItemResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SeasonalMenuDeleted(BaseModel):
    id: int
    detached_items: int
