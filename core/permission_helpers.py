from fastapi import Depends

from core.errors import PermissionDeniedError
from core.permissions import ROLE_PERMISSIONS
from dependencies.auth import get_current_user, CurrentUser


# -----------------------------------------------------
# Collect effective permissions for a role
# -----------------------------------------------------
def get_effective_permissions(user: CurrentUser) -> set:
    return set(ROLE_PERMISSIONS.get(str(user.role), []))


def has_permission(user: CurrentUser, permission: str) -> bool:
    return permission in get_effective_permissions(user)


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(permission: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("hours:review"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user, permission):
            raise PermissionDeniedError(
                f"Insufficient permissions: '{permission}' required"
            )
        return current_user

    return dependency
