import logging

from fastapi import Depends, HTTPException
from typing import Any, Dict, List, Optional

from dependencies.auth import get_optional_user
from core.cache import cache_get, cache_set
from core.logging_config import logger
from core.permissions import (
    ADMIN_ROLE,
    BUILT_IN_ROLES,
    COMMON_RESOURCES,
    SINGULAR_PLURAL_RESOURCES,
    VIEWER_ROLE,
)
from models.enums import PermissionAction
from models.user import ConsoleUser, RoleString, role_name

# Identical permission checks are logged at most once per window
DECISION_LOG_THROTTLE_SECONDS = 5


def _should_log(key: str) -> bool:
    cache_key = f"permission-log:{key}"
    if cache_get(cache_key):
        return False
    cache_set(cache_key, True, ttl_seconds=DECISION_LOG_THROTTLE_SECONDS)
    return True


# -----------------------------------------------------
# Resource key candidates
#   "voters" → ["voters", "voter"]
#   "voter"  → ["voter", "voters"]
# -----------------------------------------------------
def resource_aliases(resource: str) -> List[str]:
    if resource.endswith("s"):
        return [resource, resource[:-1]]
    return [resource, f"{resource}s"]


def _grants(permissions: Dict[str, Any], resource: str, action: str) -> bool:
    entry = permissions.get(resource)
    if not isinstance(entry, dict):
        return False
    return entry.get(action) is True


def _is_custom_string_role(user: ConsoleUser) -> bool:
    # Compared on the raw name: only exactly "admin"/"viewer" escape the
    # strict exact-key rule for string roles.
    role = user.role
    return isinstance(role, RoleString) and role.name not in BUILT_IN_ROLES


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def _evaluate(user: ConsoleUser, resource: str, action: str) -> bool:
    role = role_name(user.role)

    # Admin has permission for everything
    if role == ADMIN_ROLE:
        return True

    # Viewer can view everything
    if role == VIEWER_ROLE and action == PermissionAction.view:
        return True

    permissions = user.permissions or {}
    if not isinstance(permissions, dict) or not isinstance(resource, str):
        return False

    # Free-text string roles fail closed: exact key only
    if _is_custom_string_role(user):
        return _grants(permissions, resource, action)

    return any(_grants(permissions, key, action) for key in resource_aliases(resource))


def has_permission(user: Optional[ConsoleUser], resource: str, action: str) -> bool:
    """
    Decide whether `user` may perform `action` on `resource`.

    Order: no user → deny; admin → allow; viewer + "view" → allow; then the
    user's top-level permission map (exact key, plus the singular/plural
    alias unless the role is a free-text string). Never raises.
    """
    if user is None:
        return False

    try:
        allowed = _evaluate(user, resource, action)
    except Exception as e:
        logger.warning(f"Permission check {resource}/{action} failed closed: {e}")
        return False

    if not logger.isEnabledFor(logging.DEBUG):
        return allowed

    role = role_name(getattr(user, "role", None))
    if _should_log(f"{role}/{resource}/{action}"):
        logger.debug(
            f"[PERMISSION] {role or '<none>'}/{resource}/{action}: "
            f"{'GRANTED' if allowed else 'DENIED'}"
        )

    return allowed


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(resource: str, action: str):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_permission("voters", "view"))])
    """

    def dependency(current_user: Optional[ConsoleUser] = Depends(get_optional_user)):
        if current_user is None:
            raise HTTPException(
                status_code=401,
                detail="Please log in to access this resource",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not has_permission(current_user, resource, action):
            raise HTTPException(
                status_code=403,
                detail=f"You don't have permission to {action} {resource}",
            )
        return current_user

    return dependency


# ============================================================
# DIAGNOSTICS
# ============================================================

def dump_permissions(user: Optional[ConsoleUser]) -> dict:
    """Summarize a user's role and permission table for troubleshooting."""
    if user is None:
        logger.info("No user data to dump permissions")
        return {"role": None, "resources": [], "common": {}}

    permissions = user.permissions or {}
    common = {r: permissions[r] for r in COMMON_RESOURCES if r in permissions}

    logger.info(
        f"Permissions dump for user {user.username or user.id}: role={user.role_label!r} "
        f"resources={sorted(permissions)}"
    )

    return {
        "role": user.role_label or None,
        "resources": sorted(permissions),
        "common": common,
    }


def validate_permission_consistency(user: Optional[ConsoleUser]) -> List[str]:
    """
    Report resources whose singular and plural keys both exist in the map.
    Those grants can diverge and only structured roles see both.
    """
    if user is None or not user.permissions:
        return []

    warnings = []
    for singular, plural in SINGULAR_PLURAL_RESOURCES:
        if singular in user.permissions and plural in user.permissions:
            message = f"Inconsistent permissions: Both {singular} and {plural} exist in permissions"
            logger.warning(message)
            warnings.append(message)

    return warnings
