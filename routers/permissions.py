# routers/permissions.py

from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dependencies.auth import get_current_user, get_optional_user
from core.permission_helpers import (
    dump_permissions,
    has_permission,
    validate_permission_consistency,
)
from models.user import ConsoleUser

router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
)


class PermissionCheckRequest(BaseModel):
    resource: str
    action: str


# -----------------------------------------------------
# POST /permissions/check
# Anonymous callers are answered (allowed=false), not rejected
# -----------------------------------------------------
@router.post("/check", summary="Check one resource/action for the caller")
def check_permission(
    payload: PermissionCheckRequest,
    current_user: Optional[ConsoleUser] = Depends(get_optional_user),
):
    return {
        "resource": payload.resource,
        "action": payload.action,
        "allowed": has_permission(current_user, payload.resource, payload.action),
    }


# -----------------------------------------------------
# GET /permissions/me
# -----------------------------------------------------
@router.get("/me", summary="Caller's role and permission table")
def my_permissions(current_user: ConsoleUser = Depends(get_current_user)):
    """
    Role, resource keys and the entries for the common console screens,
    plus any singular/plural duplicates found in the table.
    """
    dump = dump_permissions(current_user)
    dump["warnings"] = validate_permission_consistency(current_user)
    return dump
