from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from utils.database import get_db
from utils.dependencies import get_role
from utils.permissions import Role
from schemas.menu_management import MenuItemCreate, MenuItemUpdate, MenuItemResponse, SeasonalAssignment
from services import catalog
import logging
# Setup logging
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/menu-management", tags=["menu_management"])


@router.get("/items", response_model=List[MenuItemResponse])
async def list_menu_items(
    category: Optional[str] = None,
    seasonal_menu_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    return catalog.list_items(db, category=category, seasonal_menu_id=seasonal_menu_id)


@router.get("/items/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(item_id: int, db: Session = Depends(get_db)):
    return catalog.get_item(db, item_id)


@router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(item: MenuItemCreate, db: Session = Depends(get_db), role: Role = Depends(get_role)):
    return catalog.create_item(db, role, item.dict())


@router.put("/items/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: int,
    item_update: MenuItemUpdate,
    db: Session = Depends(get_db),
    role: Role = Depends(get_role)
):
    return catalog.update_item(db, role, item_id, item_update.dict(exclude_unset=True))


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(item_id: int, db: Session = Depends(get_db), role: Role = Depends(get_role)):
    catalog.delete_item(db, role, item_id)


@router.post("/items/{item_id}/seasonal-menu", response_model=MenuItemResponse)
async def assign_item_to_seasonal_menu(
    item_id: int,
    assignment: SeasonalAssignment,
    db: Session = Depends(get_db),
    role: Role = Depends(get_role)
):
    return catalog.assign_to_seasonal_menu(db, role, item_id, assignment.seasonal_menu_id)


@router.delete("/items/{item_id}/seasonal-menu", response_model=MenuItemResponse)
async def remove_item_from_seasonal_menu(item_id: int, db: Session = Depends(get_db), role: Role = Depends(get_role)):
    return catalog.remove_from_seasonal_menu(db, role, item_id)
