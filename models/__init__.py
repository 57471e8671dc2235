# -------------------------
# Enums
# -------------------------
from .enums import (
    ElectionStatus,
    PermissionAction,
)

# -------------------------
# User / Role Models
# -------------------------
from .user import (
    ConsoleUser,
    PermissionMap,
    Role,
    RoleObject,
    RoleString,
    clean_permissions,
    parse_role,
    role_name,
)

# -------------------------
# Election Models
# -------------------------
from .election import (
    ElectionClockResult,
    ElectionEvaluateRequest,
    ElectionRecord,
    ElectionStatusResponse,
    MonitorSnapshot,
)

__all__ = [
    # enums
    "ElectionStatus",
    "PermissionAction",

    # users
    "ConsoleUser",
    "PermissionMap",
    "Role",
    "RoleObject",
    "RoleString",
    "clean_permissions",
    "parse_role",
    "role_name",

    # election
    "ElectionClockResult",
    "ElectionEvaluateRequest",
    "ElectionRecord",
    "ElectionStatusResponse",
    "MonitorSnapshot",
]
