"""
Catalog and seasonal-menu stores on top of SQLAlchemy.

Every mutation takes the caller's role and is guarded by the capability
table before touching the session. Reads are open to every role.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models.menu_management import MenuItem, SeasonalMenu
from services.stock_overlay import SqlStockOverlay
from utils.exceptions import FormatError, NotFoundError
from utils.permissions import Capability, require_capability
from utils.time_window import validate_date, validate_time

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("name", "description", "price", "base_price", "category", "image", "is_available")
MENU_FIELDS = ("name", "description", "start_date", "end_date", "start_time", "end_time", "is_active")
NULLABLE_ITEM_FIELDS = ("image",)


def _reject_nulls(changes: dict, fields, nullable=()):
    nulls = sorted(field for field in fields if field in changes and changes[field] is None and field not in nullable)
    if nulls:
        raise FormatError(f"Fields cannot be null: {', '.join(nulls)}")


# Menu items

def list_items(db: Session, category: Optional[str] = None, seasonal_menu_id: Optional[int] = None) -> List[MenuItem]:
    query = db.query(MenuItem)
    if category:
        query = query.filter(MenuItem.category == category)
    if seasonal_menu_id is not None:
        query = query.filter(MenuItem.seasonal_menu_id == seasonal_menu_id)
    return query.order_by(MenuItem.category, MenuItem.name, MenuItem.id).all()


def get_item(db: Session, item_id: int) -> MenuItem:
    item = db.query(MenuItem).filter(MenuItem.id == item_id).first()
    if not item:
        raise NotFoundError(f"Menu item {item_id} not found")
    return item


def create_item(db: Session, role, data: dict) -> MenuItem:
    require_capability(role, Capability.ADD_MENU)
    values = {field: data[field] for field in ITEM_FIELDS if data.get(field) is not None}
    values.setdefault("description", "")
    values.setdefault("is_available", True)
    if values.get("base_price") is None:
        values["base_price"] = values["price"]
    seasonal_menu_id = data.get("seasonal_menu_id")
    if seasonal_menu_id is not None:
        get_seasonal_menu(db, seasonal_menu_id)
        values["seasonal_menu_id"] = seasonal_menu_id

    db_item = MenuItem(**values)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info(f"Created menu item {db_item.id} '{db_item.name}' in category '{db_item.category}'")
    return db_item


def update_item(db: Session, role, item_id: int, changes: dict) -> MenuItem:
    require_capability(role, Capability.UPDATE_MENU)
    if "price" in changes:
        require_capability(role, Capability.MANAGE_PRICING)
    if "base_price" in changes:
        require_capability(role, Capability.MANAGE_BASE_PRICE)
    _reject_nulls(changes, ITEM_FIELDS, NULLABLE_ITEM_FIELDS)

    db_item = get_item(db, item_id)
    for field, value in changes.items():
        if field in ITEM_FIELDS:
            setattr(db_item, field, value)

    db.commit()
    db.refresh(db_item)
    logger.info(f"Updated menu item {item_id}: {sorted(changes)}")
    return db_item


def delete_item(db: Session, role, item_id: int):
    require_capability(role, Capability.REMOVE_MENU)
    db_item = get_item(db, item_id)
    db.delete(db_item)
    db.commit()
    purged = SqlStockOverlay(db).purge_item(item_id)
    logger.info(f"Deleted menu item {item_id} and {purged} stock records")


def _set_seasonal_owner(db: Session, item_id: int, seasonal_menu_id: Optional[int]) -> MenuItem:
    db_item = get_item(db, item_id)
    db_item.seasonal_menu_id = seasonal_menu_id
    db.commit()
    db.refresh(db_item)
    return db_item


def assign_to_seasonal_menu(db: Session, role, item_id: int, seasonal_menu_id: int) -> MenuItem:
    require_capability(role, Capability.MANAGE_SEASONAL_MENU)
    get_seasonal_menu(db, seasonal_menu_id)
    db_item = _set_seasonal_owner(db, item_id, seasonal_menu_id)
    logger.info(f"Assigned menu item {item_id} to seasonal menu {seasonal_menu_id}")
    return db_item


def remove_from_seasonal_menu(db: Session, role, item_id: int) -> MenuItem:
    require_capability(role, Capability.MANAGE_SEASONAL_MENU)
    db_item = _set_seasonal_owner(db, item_id, None)
    logger.info(f"Detached menu item {item_id} from its seasonal menu")
    return db_item


# Seasonal menus

def list_seasonal_menus(db: Session) -> List[SeasonalMenu]:
    # Insertion order decides precedence, never re-sort
    return db.query(SeasonalMenu).order_by(SeasonalMenu.id).all()


def get_seasonal_menu(db: Session, seasonal_menu_id: int) -> SeasonalMenu:
    menu = db.query(SeasonalMenu).filter(SeasonalMenu.id == seasonal_menu_id).first()
    if not menu:
        raise NotFoundError(f"Seasonal menu {seasonal_menu_id} not found")
    return menu


def _validate_window(values: dict):
    for field in ("start_date", "end_date"):
        if values.get(field) is not None:
            validate_date(values[field])
    for field in ("start_time", "end_time"):
        if values.get(field) is not None:
            validate_time(values[field])


def create_seasonal_menu(db: Session, role, data: dict) -> SeasonalMenu:
    require_capability(role, Capability.MANAGE_SEASONAL_MENU)
    values = {field: data[field] for field in MENU_FIELDS if data.get(field) is not None}
    _validate_window(values)
    values.setdefault("description", "")
    values.setdefault("is_active", True)

    db_menu = SeasonalMenu(**values)
    db.add(db_menu)
    db.commit()
    db.refresh(db_menu)
    logger.info(
        f"Created seasonal menu {db_menu.id} '{db_menu.name}' "
        f"{db_menu.start_date}..{db_menu.end_date} {db_menu.start_time}-{db_menu.end_time}"
    )
    return db_menu


def update_seasonal_menu(db: Session, role, seasonal_menu_id: int, changes: dict) -> SeasonalMenu:
    require_capability(role, Capability.MANAGE_SEASONAL_MENU)
    _reject_nulls(changes, MENU_FIELDS)
    _validate_window(changes)
    db_menu = get_seasonal_menu(db, seasonal_menu_id)
    start_date = changes.get("start_date", db_menu.start_date)
    end_date = changes.get("end_date", db_menu.end_date)
    if start_date > end_date:
        raise FormatError(f"start_date {start_date} is after end_date {end_date}")
    for field, value in changes.items():
        if field in MENU_FIELDS:
            setattr(db_menu, field, value)

    db.commit()
    db.refresh(db_menu)
    logger.info(f"Updated seasonal menu {seasonal_menu_id}: {sorted(changes)}")
    return db_menu


def detach_seasonal_menu_items(db: Session, seasonal_menu_id: int) -> int:
    """First deletion phase: every item owned by the menu returns to the base catalog."""
    detached = db.query(MenuItem).filter(
        MenuItem.seasonal_menu_id == seasonal_menu_id
    ).update({MenuItem.seasonal_menu_id: None}, synchronize_session="fetch")
    db.commit()
    return detached


def remove_seasonal_menu_record(db: Session, seasonal_menu_id: int):
    """Second deletion phase: drop the menu row itself."""
    db_menu = get_seasonal_menu(db, seasonal_menu_id)
    db.delete(db_menu)
    db.commit()


def delete_seasonal_menu(db: Session, role, seasonal_menu_id: int) -> int:
    """
    Delete a seasonal menu in two separately committed phases.

    If the second phase fails, the items are already detached while the menu
    still exists. That state is consistent for resolution (the menu simply owns
    nothing, so the base catalog is shown while it matches) and calling this
    again finishes the job.
    """
    require_capability(role, Capability.MANAGE_SEASONAL_MENU)
    get_seasonal_menu(db, seasonal_menu_id)

    detached = detach_seasonal_menu_items(db, seasonal_menu_id)
    logger.info(f"Detached {detached} items from seasonal menu {seasonal_menu_id}")
    try:
        remove_seasonal_menu_record(db, seasonal_menu_id)
    except Exception:
        db.rollback()
        logger.warning(
            f"Seasonal menu {seasonal_menu_id} items were detached but the menu was not removed; "
            f"retry the deletion"
        )
        raise
    logger.info(f"Deleted seasonal menu {seasonal_menu_id}")
    return detached
