from pydantic import BaseModel
from typing import Optional, List


class CapabilityFlags(BaseModel):
    can_add: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_manage_stock: bool = False
    can_manage_pricing: bool = False
    can_manage_seasonal_menu: bool = False


class PresentedItem(BaseModel):
    id: int
    name: str
    description: str = ""
    category: str
    image: Optional[str] = None
    price: float
    base_price: Optional[float] = None   # Headquarters only
    seasonal_menu_id: Optional[int] = None
    is_available: bool
    in_stock: bool
    orderable: bool
    capabilities: CapabilityFlags


class SelectedSeasonalMenu(BaseModel):
    id: int
    name: str
    start_time: str
    end_time: str


class PresentedCatalog(BaseModel):
    role: str
    branch_id: str
    date: str
    time: str
    seasonal_menu: Optional[SelectedSeasonalMenu] = None
    fell_back_to_full_catalog: bool = False
    capabilities: CapabilityFlags
    items: List[PresentedItem]
