from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string.
    """

    def __str__(self):
        return str(self.value)


# -----------------------------------------------------
# ELECTION LIFECYCLE STATUS
# -----------------------------------------------------
class ElectionStatus(BaseStrEnum):
    """Lifecycle state derived from the election window and the clock."""

    not_started = "not-started"
    active = "active"
    ended = "ended"


# -----------------------------------------------------
# PERMISSION ACTION
# -----------------------------------------------------
class PermissionAction(BaseStrEnum):
    """Standard console actions. Call sites may use others."""

    view = "view"
    add = "add"
    edit = "edit"
    delete = "delete"
