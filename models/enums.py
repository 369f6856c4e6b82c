from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# MODERATION STATUS
# -----------------------------------------------------
class ModerationStatus(BaseStrEnum):
    """Shared lifecycle of projects, hour submissions and edit requests."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class UserRole(BaseStrEnum):
    user = "user"
    admin = "admin"
