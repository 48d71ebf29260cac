"""
Builds the item list a caller sees for one instant, branch and role.

Inputs are passed on every call and nothing is cached between calls:

1. the seasonal menu resolver picks the current menu (first match wins);
2. with a current menu the view is that menu's items, falling back to the
   full catalog while the menu has none assigned; without one it is the base
   catalog (items with no seasonal owner);
3. branch stock decides ``in_stock``; customers only get orderable items,
   staff see everything with explicit flags;
4. items are ordered by (category, name).
"""
import logging
from datetime import datetime
from typing import Iterable, List, Sequence, Union

from schemas.availability import CapabilityFlags, PresentedCatalog, PresentedItem, SelectedSeasonalMenu
from services.seasonal_menu_resolver import SeasonalMenuResolver, seasonal_menu_resolver
from utils.permissions import Capability, Role, has, parse_role
from utils.time_window import split_instant
from utils.validators import validate_branch_id

logger = logging.getLogger(__name__)


def capability_flags(role: Union[str, Role]) -> CapabilityFlags:
    return CapabilityFlags(
        can_add=has(role, Capability.ADD_MENU),
        can_edit=has(role, Capability.UPDATE_MENU),
        can_delete=has(role, Capability.REMOVE_MENU),
        can_manage_stock=has(role, Capability.MANAGE_STOCK),
        can_manage_pricing=has(role, Capability.MANAGE_PRICING),
        can_manage_seasonal_menu=has(role, Capability.MANAGE_SEASONAL_MENU),
    )


def base_catalog(catalog: Iterable) -> List:
    return [item for item in catalog if item.seasonal_menu_id is None]


def presentation_order(item):
    return (item.category, item.name, item.id)


class AvailabilityEngine:

    def __init__(self, resolver: SeasonalMenuResolver = seasonal_menu_resolver):
        self.resolver = resolver

    def select_items(self, catalog: Sequence, selected_menu):
        """Return (items, fell_back_to_full_catalog) for the selected seasonal menu or None."""
        if selected_menu is None:
            return base_catalog(catalog), False
        seasonal_items = [item for item in catalog if item.seasonal_menu_id == selected_menu.id]
        if seasonal_items:
            return seasonal_items, False
        logger.debug(f"Seasonal menu {selected_menu.id} has no items yet, showing full catalog")
        return list(catalog), True

    def resolve(
        self,
        now: Union[datetime, str],
        branch_id: str,
        role: Union[str, Role],
        catalog: Sequence,
        seasonal_menus: Sequence,
        stock_ledger,
    ) -> PresentedCatalog:
        role = parse_role(role)
        branch_id = validate_branch_id(branch_id)
        current_date, current_time = split_instant(now)

        selected_menu = self.resolver.current(seasonal_menus, now)
        items, fell_back = self.select_items(list(catalog), selected_menu)

        flags = capability_flags(role)
        show_base_price = has(role, Capability.VIEW_BASE_PRICE)
        presented = []
        for item in sorted(items, key=presentation_order):
            in_stock = stock_ledger.is_in_stock(branch_id, item.id)
            orderable = in_stock and bool(item.is_available)
            if role == Role.CUSTOMER and not orderable:
                continue
            presented.append(PresentedItem(
                id=item.id,
                name=item.name,
                description=item.description or "",
                category=item.category,
                image=item.image,
                price=item.price,
                base_price=item.base_price if show_base_price else None,
                seasonal_menu_id=item.seasonal_menu_id,
                is_available=bool(item.is_available),
                in_stock=in_stock,
                orderable=orderable,
                capabilities=flags,
            ))

        logger.debug(
            f"Resolved {len(presented)} items for role={role.value} branch={branch_id} "
            f"at {current_date} {current_time} (seasonal menu: {selected_menu.id if selected_menu else None})"
        )
        return PresentedCatalog(
            role=role.value,
            branch_id=branch_id,
            date=current_date,
            time=current_time,
            seasonal_menu=SelectedSeasonalMenu(
                id=selected_menu.id,
                name=selected_menu.name,
                start_time=selected_menu.start_time,
                end_time=selected_menu.end_time,
            ) if selected_menu is not None else None,
            fell_back_to_full_catalog=fell_back,
            capabilities=flags,
            items=presented,
        )


availability_engine = AvailabilityEngine()
