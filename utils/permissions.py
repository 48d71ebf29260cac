import enum
import logging
from typing import FrozenSet, Union

from utils.exceptions import ConfigurationError, PermissionDeniedError

logger = logging.getLogger(__name__)


class Role(str, enum.Enum):
    HEADQUARTERS = "hq"        # Owns the shared catalog and seasonal menus
    BRANCH = "branch"          # Branch admin: prices and stock at one branch
    CUSTOMER = "customer"      # Orders from the presented catalog


class Capability(str, enum.Enum):
    ADD_MENU = "add_menu"
    REMOVE_MENU = "remove_menu"
    UPDATE_MENU = "update_menu"
    MANAGE_SEASONAL_MENU = "manage_seasonal_menu"
    MANAGE_STOCK = "manage_stock"
    MANAGE_PRICING = "manage_pricing"
    MANAGE_BASE_PRICE = "manage_base_price"
    VIEW_BASE_PRICE = "view_base_price"
    VIEW_ORDERS = "view_orders"
    MANAGE_ORDERS = "manage_orders"


ROLE_CAPABILITIES = {
    Role.HEADQUARTERS: frozenset({
        Capability.ADD_MENU,
        Capability.REMOVE_MENU,
        Capability.UPDATE_MENU,
        Capability.MANAGE_SEASONAL_MENU,
        Capability.MANAGE_PRICING,
        Capability.MANAGE_BASE_PRICE,
        Capability.VIEW_BASE_PRICE,
        Capability.VIEW_ORDERS,
    }),
    Role.BRANCH: frozenset({
        Capability.UPDATE_MENU,
        Capability.MANAGE_STOCK,
        Capability.MANAGE_PRICING,
        Capability.VIEW_ORDERS,
        Capability.MANAGE_ORDERS,
    }),
    Role.CUSTOMER: frozenset(),
}

_ROLE_ALIASES = {
    "headquarters": Role.HEADQUARTERS,
    "user": Role.CUSTOMER,
}


def parse_role(token: Union[str, Role, None]) -> Role:
    """Turn a caller-supplied role token into a Role, or fail fast."""
    if isinstance(token, Role):
        return token
    if not token or not isinstance(token, str):
        raise ConfigurationError("Role is required")
    normalized = token.strip().lower()
    if normalized in _ROLE_ALIASES:
        return _ROLE_ALIASES[normalized]
    try:
        return Role(normalized)
    except ValueError:
        raise ConfigurationError(f"Unknown role '{token}'")


def permissions_for(role: Union[str, Role]) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES[parse_role(role)]


def has(role: Union[str, Role], capability: Capability) -> bool:
    return capability in permissions_for(role)


def require_capability(role: Union[str, Role], capability: Capability) -> Role:
    """Guard a mutation entry point. Read paths never call this."""
    role = parse_role(role)
    if not has(role, capability):
        logger.warning(f"Role {role.value} denied capability {capability.value}")
        raise PermissionDeniedError(
            f"Role '{role.value}' is not allowed to {capability.value.replace('_', ' ')}"
        )
    return role
