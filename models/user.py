# models/user.py

from typing import Any, Dict, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# Resource → action → flag. Only a literal True grants; anything else
# (missing, False, "true", 1) is a deny.
PermissionMap = Dict[str, Dict[str, Any]]

# Keys the backend's document store leaks into serialized sub-documents
DOCUMENT_INTERNAL_KEYS = {"$__parent", "$__", "$isNew", "_id", "__v"}


def clean_permissions(raw: Any) -> PermissionMap:
    """
    Strip document-store internals from a permission payload.

    Each resource entry loses `$__parent`, `$__`, `$isNew`, `_id` and `__v`;
    entries still wrapped in a `_doc` envelope are unwrapped first. Resource
    entries that are not mappings are dropped. A missing map becomes `{}`.
    """
    if not isinstance(raw, dict):
        return {}

    clean: PermissionMap = {}
    for resource, value in raw.items():
        if not isinstance(value, dict):
            continue

        doc = value.get("_doc")
        if isinstance(doc, dict):
            value = doc

        clean[resource] = {
            k: v for k, v in value.items() if k not in DOCUMENT_INTERNAL_KEYS
        }

    return clean


# ===============================================================
# ROLE VARIANTS
# ===============================================================

class RoleString(BaseModel):
    """A bare role name: "admin", "viewer" or a free-text custom role."""
    kind: Literal["string"] = "string"
    name: str


class RoleObject(BaseModel):
    """
    A structured role as stored by the backend.

    `permissions` is kept for display only. The resolver reads the user's
    top-level permission map.
    """
    kind: Literal["object"] = "object"
    name: Optional[str] = None
    permissions: PermissionMap = Field(default_factory=dict)


Role = Union[RoleString, RoleObject]


def parse_role(raw: Any) -> Optional[Role]:
    """Build a Role variant from a backend payload value (str or object)."""
    if isinstance(raw, (RoleString, RoleObject)):
        return raw
    if isinstance(raw, str):
        return RoleString(name=raw)
    if isinstance(raw, dict):
        name = raw.get("name")
        return RoleObject(
            name=name if isinstance(name, str) else None,
            permissions=clean_permissions(raw.get("permissions")),
        )
    return None


def role_name(role: Optional[Role]) -> str:
    """Lowercase role name used by every permission decision ("" if unknown)."""
    name = getattr(role, "name", None)
    if not isinstance(name, str):
        return ""
    return name.lower()


# ===============================================================
# CONSOLE USER
# ===============================================================

class ConsoleUser(BaseModel):
    """
    Signed-in console account as returned by the backend session endpoint.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    username: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None

    role: Optional[Role] = None
    permissions: PermissionMap = Field(default_factory=dict)

    @field_validator("id", mode="before")
    def stringify_id(cls, v):
        if v is None:
            return None
        return str(v)

    @field_validator("role", mode="before")
    def parse_role_payload(cls, v):
        return parse_role(v)

    @field_validator("permissions", mode="before")
    def parse_permissions_payload(cls, v):
        return clean_permissions(v)

    @property
    def role_label(self) -> str:
        """Role name as shown to people (original casing)."""
        return getattr(self.role, "name", None) or ""
