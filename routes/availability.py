from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from utils.database import get_db
from utils.dependencies import get_branch_id, get_now, get_role
from utils.permissions import Role
from schemas.availability import PresentedCatalog
from services import catalog
from services.availability_engine import availability_engine
from services.stock_overlay import SqlStockOverlay

router = APIRouter(prefix="/api/v1/availability", tags=["availability"])


@router.get("", response_model=PresentedCatalog)
async def resolve_availability(
    now: datetime = Depends(get_now),
    branch_id: str = Depends(get_branch_id),
    role: Role = Depends(get_role),
    db: Session = Depends(get_db)
):
    return availability_engine.resolve(
        now,
        branch_id,
        role,
        catalog.list_items(db),
        catalog.list_seasonal_menus(db),
        SqlStockOverlay(db),
    )
