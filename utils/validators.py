import re
from typing import Optional

from utils.config import settings
from utils.exceptions import ConfigurationError

BRANCH_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")


def validate_branch_id(branch_id: Optional[str]) -> str:
    """Branch ids are opaque tokens; only their shape (and an optional whitelist) is checked."""
    if branch_id is None or not isinstance(branch_id, str) or not branch_id.strip():
        raise ConfigurationError("Branch context is required")
    branch_id = branch_id.strip()
    if not BRANCH_ID_PATTERN.match(branch_id):
        raise ConfigurationError(f"Invalid branch id '{branch_id}'")
    if settings.known_branches and branch_id not in settings.known_branches:
        raise ConfigurationError(f"Unknown branch '{branch_id}'")
    return branch_id
