# services/workflow.py

"""
Moderation workflow shared by projects, hour submissions and edit requests.

    pending --approve(admin)--> approved
    pending --reject(admin)---> rejected

approved and rejected are terminal. Every transition is a single
compare-and-set on status=pending, so a concurrent decision by another
admin surfaces as ConflictError instead of being overwritten.
"""

from datetime import datetime, timezone
from typing import Optional

from core.errors import InvalidStateError, PermissionDeniedError, ValidationError
from core.logging_config import logger
from models.enums import ModerationStatus, UserRole


TERMINAL_STATES = (ModerationStatus.approved.value, ModerationStatus.rejected.value)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def require_admin(actor) -> None:
    if actor is None or str(actor.role) != UserRole.admin.value:
        raise PermissionDeniedError("Admin privileges required for this action.")


def ensure_pending(row: dict, kind: str) -> None:
    current = row.get("status")
    if current != ModerationStatus.pending.value:
        raise InvalidStateError(
            f"{kind} {row.get('id')} is already {current}; only pending items can be reviewed"
        )


def review_stamp(actor) -> dict:
    return {"reviewed_by": actor.id, "reviewed_at": utcnow_iso()}


def transition(
    store,
    table: str,
    row_id: str,
    actor,
    target: str,
    kind: str,
    stamp_reviewer: bool = True,
    extra: Optional[dict] = None,
) -> dict:
    """Move one pending row to approved/rejected on behalf of an admin."""
    target = str(target)
    if target not in TERMINAL_STATES:
        raise ValidationError(f"Invalid decision: {target}")

    require_admin(actor)

    row = store.read_one(table, row_id)
    ensure_pending(row, kind)

    patch = {"status": target}
    if stamp_reviewer:
        patch.update(review_stamp(actor))
    if extra:
        patch.update(extra)

    updated = store.update(
        table,
        row_id,
        patch,
        expected={"status": ModerationStatus.pending.value},
    )

    logger.info(f"Admin {actor.id} set {kind} {row_id} to {target}")
    return updated
