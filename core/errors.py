# core/errors.py

from typing import Optional


# ============================================================
# Domain error taxonomy
# ============================================================

class VolunteerError(Exception):
    """Base class for every error surfaced to the acting user."""

    status_code = 400
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VolunteerError):
    """Bad input shape or range, raised before any write."""

    status_code = 422
    code = "validation_error"


class AuthError(VolunteerError):
    """Bad credentials or an expired session."""

    status_code = 401
    code = "auth_error"


class PermissionDeniedError(AuthError):
    """Authenticated, but the actor may not perform this action."""

    status_code = 403
    code = "permission_denied"


class NotFoundError(VolunteerError):
    status_code = 404
    code = "not_found"


class ConflictError(VolunteerError):
    """Uniqueness violation or a stale write target."""

    status_code = 409
    code = "conflict"


class InvalidStateError(ConflictError):
    """A moderation transition was attempted from a non-pending state."""

    code = "invalid_state"


class StorageError(VolunteerError):
    """Supabase (tables or blob storage) failed the request."""

    status_code = 502
    code = "storage_error"


# ============================================================
# Supabase error helpers
# ============================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: PostgREST / GoTrue errors carry .message
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2: errors with args (common)
    if error.args:
        return str(error.args[0])

    return str(error) or "Unknown Supabase error"


def extract_supabase_code(error: Exception) -> Optional[str]:
    code = getattr(error, "code", None)
    return str(code) if code is not None else None


def translate_supabase_error(error: Exception, operation: str = "Database operation") -> VolunteerError:
    """
    Map a raw Supabase exception onto the domain taxonomy.
    Returns the error (doesn't raise) so the caller can `raise ... from`.
    """
    if isinstance(error, VolunteerError):
        return error

    from core.logging_config import logger

    detail = extract_supabase_error(error)
    code = extract_supabase_code(error)
    logger.error(f"{operation}: {detail}")

    lowered = detail.lower()
    # GoTrue reports an existing email as "User already registered"
    if (
        code in ("23505", "user_already_exists")
        or "duplicate" in lowered
        or "unique" in lowered
        or "already registered" in lowered
        or "already been registered" in lowered
    ):
        return ConflictError(f"{operation}: record already exists")
    if code == "23503" or "foreign key" in lowered:
        return ValidationError(f"{operation}: invalid reference")
    if code == "PGRST116" or "not found" in lowered or "does not exist" in lowered:
        return NotFoundError(f"{operation}: resource not found")
    return StorageError(f"{operation} failed: {detail}")
