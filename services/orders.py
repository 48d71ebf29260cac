import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

from sqlalchemy.orm import Session

from models.order_management import Order, OrderItem, OrderStatus
from services import catalog
from services.availability_engine import availability_engine
from services.stock_overlay import SqlStockOverlay
from utils.exceptions import ConfigurationError, InvalidTransitionError, NotFoundError
from utils.permissions import Capability, Role, require_capability
from utils.validators import validate_branch_id

logger = logging.getLogger(__name__)

VALID_TRANSITIONS = {
    OrderStatus.PENDING: [OrderStatus.CONFIRMED, OrderStatus.CANCELLED],
    OrderStatus.CONFIRMED: [OrderStatus.COMPLETED, OrderStatus.CANCELLED],
    OrderStatus.COMPLETED: [],
    OrderStatus.CANCELLED: [],
}


def validate_status_transition(current_status: OrderStatus, new_status: OrderStatus):
    if new_status not in VALID_TRANSITIONS[OrderStatus(current_status)]:
        raise InvalidTransitionError(
            f"Invalid order status transition from {OrderStatus(current_status).value} to {OrderStatus(new_status).value}"
        )


def place_order(
    db: Session,
    now: Union[datetime, str],
    branch_id: str,
    lines: Sequence[Tuple[int, int]],
):
    """
    Create an order from (menu_item_id, quantity) lines.

    Each item has to be on the customer view of the branch at ``now``; prices
    come from that view.
    """
    branch_id = validate_branch_id(branch_id)
    if not lines:
        raise ConfigurationError("An order needs at least one item")

    presented = availability_engine.resolve(
        now,
        branch_id,
        Role.CUSTOMER,
        catalog.list_items(db),
        catalog.list_seasonal_menus(db),
        SqlStockOverlay(db),
    )
    orderable = {item.id: item for item in presented.items}

    db_order = Order(
        branch_id=branch_id,
        status=OrderStatus.PENDING,
        seasonal_menu_id=presented.seasonal_menu.id if presented.seasonal_menu else None,
    )
    total_amount = 0.0
    for menu_item_id, quantity in lines:
        item = orderable.get(menu_item_id)
        if item is None:
            logger.warning(f"Menu item {menu_item_id} is not orderable at branch {branch_id}")
            raise NotFoundError(f"Menu item {menu_item_id} is not available at branch {branch_id}")
        line_total = round(item.price * quantity, 2)
        total_amount += line_total
        db_order.items.append(OrderItem(
            menu_item_id=item.id,
            name=item.name,
            quantity=quantity,
            unit_price=item.price,
            total_price=line_total,
        ))

    db_order.total_amount = round(total_amount, 2)
    db.add(db_order)
    db.commit()
    db.refresh(db_order)
    logger.info(f"Placed order {db_order.id} at branch {branch_id} for {db_order.total_amount}")
    return db_order


def list_orders(db: Session, role, branch_id: Optional[str] = None, status: Optional[OrderStatus] = None) -> List[Order]:
    require_capability(role, Capability.VIEW_ORDERS)
    query = db.query(Order)
    if branch_id:
        query = query.filter(Order.branch_id == validate_branch_id(branch_id))
    if status:
        query = query.filter(Order.status == status)
    return query.order_by(Order.id.desc()).all()


def get_order(db: Session, role, order_id: int) -> Order:
    require_capability(role, Capability.VIEW_ORDERS)
    db_order = db.query(Order).filter(Order.id == order_id).first()
    if not db_order:
        raise NotFoundError(f"Order {order_id} not found")
    return db_order


def update_order_status(db: Session, role, order_id: int, new_status: OrderStatus) -> Order:
    require_capability(role, Capability.MANAGE_ORDERS)
    db_order = get_order(db, role, order_id)
    validate_status_transition(db_order.status, new_status)
    db_order.status = new_status
    db.commit()
    db.refresh(db_order)
    logger.info(f"Order {order_id} moved to {OrderStatus(new_status).value}")
    return db_order


def cancel_order(db: Session, role, order_id: int) -> Order:
    """DELETE keeps the row and marks it cancelled, so order history stays intact."""
    return update_order_status(db, role, order_id, OrderStatus.CANCELLED)
