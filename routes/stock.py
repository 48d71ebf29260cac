from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from utils.database import get_db
from utils.dependencies import get_branch_id, require_capability_dependency
from utils.permissions import Capability, Role
from models.stock import StockRecord
from schemas.stock import StockUpdate, StockResponse
from services import catalog
from services.stock_overlay import SqlStockOverlay

router = APIRouter(prefix="/api/v1/stock", tags=["stock"])

manage_stock = require_capability_dependency(Capability.MANAGE_STOCK)


def _response(record: StockRecord) -> StockResponse:
    return StockResponse(
        branch_id=record.branch_id,
        menu_item_id=record.menu_item_id,
        quantity=record.quantity,
        in_stock=record.in_stock,
        last_updated=record.last_updated,
    )


@router.get("", response_model=List[StockResponse])
async def list_branch_stock(branch_id: str = Depends(get_branch_id), db: Session = Depends(get_db)):
    return [_response(record) for record in SqlStockOverlay(db).records_for_branch(branch_id)]


@router.get("/{item_id}", response_model=StockResponse)
async def get_item_stock(item_id: int, branch_id: str = Depends(get_branch_id), db: Session = Depends(get_db)):
    quantity = SqlStockOverlay(db).get(branch_id, item_id)
    return StockResponse(branch_id=branch_id, menu_item_id=item_id, quantity=quantity, in_stock=quantity > 0)


@router.put("/{item_id}", response_model=StockResponse)
async def update_item_stock(
    item_id: int,
    stock_update: StockUpdate,
    branch_id: str = Depends(get_branch_id),
    db: Session = Depends(get_db),
    role: Role = Depends(manage_stock)
):
    catalog.get_item(db, item_id)
    return _response(SqlStockOverlay(db).set(branch_id, item_id, stock_update.quantity))


@router.post("/{item_id}/in-stock", response_model=StockResponse)
async def mark_in_stock(
    item_id: int,
    branch_id: str = Depends(get_branch_id),
    db: Session = Depends(get_db),
    role: Role = Depends(manage_stock)
):
    catalog.get_item(db, item_id)
    return _response(SqlStockOverlay(db).set_in_stock(branch_id, item_id))


@router.post("/{item_id}/out-of-stock", response_model=StockResponse)
async def mark_out_of_stock(
    item_id: int,
    branch_id: str = Depends(get_branch_id),
    db: Session = Depends(get_db),
    role: Role = Depends(manage_stock)
):
    catalog.get_item(db, item_id)
    return _response(SqlStockOverlay(db).set_out_of_stock(branch_id, item_id))


@router.post("/{item_id}/toggle", response_model=StockResponse)
async def toggle_stock(
    item_id: int,
    branch_id: str = Depends(get_branch_id),
    db: Session = Depends(get_db),
    role: Role = Depends(manage_stock)
):
    catalog.get_item(db, item_id)
    return _response(SqlStockOverlay(db).toggle(branch_id, item_id))
