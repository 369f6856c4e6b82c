# services/profiles.py

"""
Profiles and the admin bootstrap gate.

The system starts with zero admins. While that holds, a new user may ask to
become the first admin during registration. The gate is a live count over
the profiles table, re-read every time it decides anything.
"""

import time
from typing import Callable, Optional

from core.config import settings
from core.errors import ConflictError, NotFoundError, PermissionDeniedError, VolunteerError
from core.logging_config import logger
from models.auth import Identity
from models.enums import UserRole
from services.hours import approved_total, approved_totals
from services.workflow import require_admin, utcnow_iso


PROFILES = "profiles"


# -----------------------------------------------------
# Bootstrap gate
# -----------------------------------------------------
def can_self_promote(store) -> bool:
    return store.count(PROFILES, {"role": UserRole.admin.value}) == 0


# -----------------------------------------------------
# Provisioning
# -----------------------------------------------------
def find_profile(store, user_id: str) -> Optional[dict]:
    rows = store.read(PROFILES, {"id": user_id}, limit=1)
    return rows[0] if rows else None


def wait_for_profile(
    store,
    user_id: str,
    attempts: Optional[int] = None,
    interval: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[dict]:
    """
    Poll for a profile that a server-side trigger may still be creating.
    Returns None once the attempts are used up.
    """
    attempts = settings.PROFILE_POLL_ATTEMPTS if attempts is None else attempts
    interval = settings.PROFILE_POLL_INTERVAL_SECONDS if interval is None else interval

    for attempt in range(max(attempts, 1)):
        profile = find_profile(store, user_id)
        if profile is not None:
            return profile
        if attempt < attempts - 1:
            sleep(interval)
    return None


def ensure_profile(store, identity: Identity, **poll_options) -> dict:
    profile = wait_for_profile(store, identity.id, **poll_options)
    if profile is not None:
        return profile

    try:
        profile = store.insert(
            PROFILES,
            {
                "id": identity.id,
                "email": identity.email,
                "full_name": identity.full_name or "",
                "role": UserRole.user.value,
            },
        )
        logger.info(f"Created profile for {identity.id}")
        return profile
    except ConflictError:
        # Provisioned concurrently between the last poll and the insert
        profile = find_profile(store, identity.id)
        if profile is None:
            raise
        return profile


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def get_profile(store, user_id: str) -> dict:
    profile = find_profile(store, user_id)
    if profile is None:
        raise NotFoundError(f"Profile {user_id} not found")
    return {**profile, "total_hours": approved_total(store, user_id)}


def list_profiles(store, actor) -> list:
    require_admin(actor)
    totals = approved_totals(store)
    rows = store.read(PROFILES, order="created_at", desc=True)
    return [{**row, "total_hours": totals.get(row["id"], 0)} for row in rows]


# -----------------------------------------------------
# Promotion
# -----------------------------------------------------
def promote_to_admin(store, user_id: str) -> dict:
    """Unconditional role change; callers check authorization first."""
    profile = store.update(
        PROFILES,
        user_id,
        {"role": UserRole.admin.value, "updated_at": utcnow_iso()},
    )
    logger.info(f"Promoted {user_id} to admin")
    return profile


def promote_user(store, actor, user_id: str) -> dict:
    require_admin(actor)

    if user_id == actor.id:
        raise PermissionDeniedError("You are already an admin")

    target = find_profile(store, user_id)
    if target is None:
        raise NotFoundError(f"Profile {user_id} not found")
    if target.get("role") == UserRole.admin.value:
        raise ConflictError(f"{user_id} is already an admin")

    promote_to_admin(store, user_id)
    logger.info(f"Admin {actor.id} promoted {user_id}")
    return get_profile(store, user_id)


# -----------------------------------------------------
# Registration
# -----------------------------------------------------
def register_user(
    store,
    email: str,
    password: str,
    full_name: str,
    make_admin: bool = False,
    **poll_options,
) -> tuple:
    """
    Returns (profile, admin_granted, access_token).

    A requested self-promotion is only attempted if the gate is still open
    after the profile exists. If the gate closed in the meantime, or the
    promotion write is rejected, the user keeps the plain user role.
    """
    identity = store.register(email.strip().lower(), password, full_name.strip())
    profile = ensure_profile(store, identity, **poll_options)
    logger.info(f"Registered {identity.id}")

    admin_granted = False
    if make_admin:
        if can_self_promote(store):
            try:
                promote_to_admin(store, identity.id)
                admin_granted = True
            except VolunteerError as e:
                logger.warning(f"Bootstrap promotion refused for {identity.id}: {e.message}")
        else:
            logger.warning(f"Bootstrap promotion requested by {identity.id} after an admin exists")

    profile = get_profile(store, profile["id"])
    return profile, admin_granted, identity.access_token
