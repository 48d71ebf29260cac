from datetime import datetime
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from utils.database import get_db
from utils.dependencies import get_branch_id, get_now, get_role
from utils.permissions import Role
from models.order_management import OrderStatus
from schemas.order_management import OrderCreate, OrderResponse, OrderStatusUpdate
from services import orders

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    now: datetime = Depends(get_now),
    branch_id: str = Depends(get_branch_id),
    db: Session = Depends(get_db)
):
    lines = [(line.menu_item_id, line.quantity) for line in order.items]
    return orders.place_order(db, now, branch_id, lines)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    branch_id: Optional[str] = None,
    order_status: Optional[OrderStatus] = None,
    db: Session = Depends(get_db),
    role: Role = Depends(get_role)
):
    return orders.list_orders(db, role, branch_id=branch_id, status=order_status)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, db: Session = Depends(get_db), role: Role = Depends(get_role)):
    return orders.get_order(db, role, order_id)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    db: Session = Depends(get_db),
    role: Role = Depends(get_role)
):
    return orders.update_order_status(db, role, order_id, status_update.status)


@router.delete("/{order_id}", response_model=OrderResponse)
async def cancel_order(order_id: int, db: Session = Depends(get_db), role: Role = Depends(get_role)):
    return orders.cancel_order(db, role, order_id)
