from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from utils.database import get_db
from utils.dependencies import get_now, get_role
from utils.permissions import Role
from schemas.menu_management import (
    SeasonalMenuCreate,
    SeasonalMenuUpdate,
    SeasonalMenuResponse,
    SeasonalMenuDeleted,
)
from services import catalog
from services.seasonal_menu_resolver import seasonal_menu_resolver, menus_in_date_range

router = APIRouter(prefix="/api/v1/seasonal-menus", tags=["seasonal-menus"])


@router.get("", response_model=List[SeasonalMenuResponse])
async def list_seasonal_menus(
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    menus = catalog.list_seasonal_menus(db)
    if start_date or end_date:
        if not (start_date and end_date):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="start_date and end_date must be given together"
            )
        menus = menus_in_date_range(menus, start_date, end_date)
    return menus


@router.get("/current", response_model=Optional[SeasonalMenuResponse])
async def get_current_seasonal_menu(now: datetime = Depends(get_now), db: Session = Depends(get_db)):
    return seasonal_menu_resolver.current(catalog.list_seasonal_menus(db), now)


@router.get("/active", response_model=List[SeasonalMenuResponse])
async def list_active_seasonal_menus(now: datetime = Depends(get_now), db: Session = Depends(get_db)):
    return seasonal_menu_resolver.all_currently_active(catalog.list_seasonal_menus(db), now)


@router.get("/{seasonal_menu_id}", response_model=SeasonalMenuResponse)
async def get_seasonal_menu(seasonal_menu_id: int, db: Session = Depends(get_db)):
    return catalog.get_seasonal_menu(db, seasonal_menu_id)


@router.post("", response_model=SeasonalMenuResponse, status_code=status.HTTP_201_CREATED)
async def create_seasonal_menu(
    menu: SeasonalMenuCreate,
    db: Session = Depends(get_db),
    role: Role = Depends(get_role)
):
    return catalog.create_seasonal_menu(db, role, menu.dict())


@router.put("/{seasonal_menu_id}", response_model=SeasonalMenuResponse)
async def update_seasonal_menu(
    seasonal_menu_id: int,
    menu_update: SeasonalMenuUpdate,
    db: Session = Depends(get_db),
    role: Role = Depends(get_role)
):
    return catalog.update_seasonal_menu(db, role, seasonal_menu_id, menu_update.dict(exclude_unset=True))


@router.delete("/{seasonal_menu_id}", response_model=SeasonalMenuDeleted)
async def delete_seasonal_menu(seasonal_menu_id: int, db: Session = Depends(get_db), role: Role = Depends(get_role)):
    detached = catalog.delete_seasonal_menu(db, role, seasonal_menu_id)
    return {"id": seasonal_menu_id, "detached_items": detached}
