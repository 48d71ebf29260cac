from datetime import datetime
from typing import Optional

from fastapi import Depends, Header, Query

from utils.exceptions import FormatError
from utils.permissions import Capability, Role, parse_role, require_capability
from utils.validators import validate_branch_id


def get_role(x_role: Optional[str] = Header(None, alias="X-Role")) -> Role:
    return parse_role(x_role)


def get_branch_id(branch_id: Optional[str] = Query(None)) -> str:
    return validate_branch_id(branch_id)


def get_now(at: Optional[str] = Query(None, description="ISO 8601 instant, defaults to the server clock")) -> datetime:
    # The only place a wall clock is read; everything below gets "now" passed in
    if at is None:
        return datetime.now()
    try:
        return datetime.fromisoformat(at)
    except ValueError:
        raise FormatError(f"Invalid instant '{at}', expected an ISO 8601 datetime")


def require_capability_dependency(capability: Capability):
    def capability_dependency(role: Role = Depends(get_role)) -> Role:
        return require_capability(role, capability)
    return capability_dependency
