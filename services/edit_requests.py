# services/edit_requests.py

"""
Project edit requests.

A project's editable fields only change through creation or through an
approved edit request. Approval is two writes (project, then request); if
the second write fails the first is rolled back to the snapshot taken
before it, so callers see all-or-nothing. The rollback is itself a
compare-and-set on the updated_at we wrote, and it is skipped when another
admin approved the same request in between.
"""

from typing import Optional

from core.errors import (
    ConflictError,
    InvalidStateError,
    PermissionDeniedError,
    ValidationError,
    VolunteerError,
)
from core.logging_config import logger
from models.enums import ModerationStatus
from services.embeds import attach_profiles, attach_projects
from services.validation import normalize_thumbnail, validate_project_fields
from services.workflow import (
    ensure_pending,
    require_admin,
    review_stamp,
    transition,
    utcnow_iso,
)


PROJECTS = "projects"
EDIT_REQUESTS = "project_edit_requests"

EDITABLE_FIELDS = (
    "title",
    "description",
    "expected_hours",
    "location",
    "date",
    "thumbnail_url",
)


def _comparable(field: str, value):
    if field == "thumbnail_url":
        return normalize_thumbnail(value)
    return value


def diff_fields(project: dict, proposal: dict) -> dict:
    """Fields whose proposed value differs from the project's current value."""
    return {
        field: proposal.get(field)
        for field in EDITABLE_FIELDS
        if _comparable(field, proposal.get(field)) != _comparable(field, project.get(field))
    }


# -----------------------------------------------------
# Create (project creator only)
# -----------------------------------------------------
def create_edit_request(store, actor, project_id: str, fields: dict) -> dict:
    project = store.read_one(PROJECTS, project_id)
    if project.get("created_by") != actor.id:
        raise PermissionDeniedError("Only the project's creator can request edits")

    proposal = validate_project_fields(fields)
    if not diff_fields(project, proposal):
        raise ValidationError("No changes to submit")

    request = store.insert(
        EDIT_REQUESTS,
        {
            "project_id": project_id,
            "user_id": actor.id,
            **proposal,
            "status": ModerationStatus.pending.value,
        },
    )
    logger.info(f"User {actor.id} requested edit {request['id']} for project {project_id}")
    return request


# -----------------------------------------------------
# Admin decisions
# -----------------------------------------------------
def approve_edit_request(store, actor, request_id: str) -> dict:
    require_admin(actor)

    request = store.read_one(EDIT_REQUESTS, request_id)
    ensure_pending(request, "Edit request")

    project = store.read_one(PROJECTS, request["project_id"])
    snapshot = {field: project.get(field) for field in EDITABLE_FIELDS}
    snapshot["updated_at"] = project.get("updated_at")

    applied = {field: request.get(field) for field in EDITABLE_FIELDS}
    applied["thumbnail_url"] = normalize_thumbnail(applied["thumbnail_url"])
    applied["updated_at"] = utcnow_iso()

    # Write 1: if this fails the request is untouched and stays pending
    store.update(PROJECTS, project["id"], applied)

    # Write 2: mark the request approved, only if still pending
    try:
        approved = store.update(
            EDIT_REQUESTS,
            request_id,
            {"status": ModerationStatus.approved.value, **review_stamp(actor)},
            expected={"status": ModerationStatus.pending.value},
        )
    except VolunteerError as e:
        current = _current_status(store, request_id)

        if current == ModerationStatus.approved.value:
            # Another admin approved the same request; the project already
            # holds these values, so there is nothing to undo
            logger.warning(f"Edit request {request_id} was approved concurrently by another admin")
        else:
            logger.error(
                f"Approving edit request {request_id} failed after project {project['id']} "
                f"was updated ({e.message}); restoring previous project fields"
            )
            _restore_project(store, project["id"], snapshot, applied["updated_at"])

        if current is not None and current != ModerationStatus.pending.value:
            raise InvalidStateError(
                f"Edit request {request_id} is already {current}; only pending items can be reviewed"
            ) from e
        raise

    logger.info(f"Admin {actor.id} approved edit request {request_id} for project {project['id']}")
    return approved


def _current_status(store, request_id: str) -> Optional[str]:
    try:
        return store.read_one(EDIT_REQUESTS, request_id).get("status")
    except VolunteerError:
        return None


def _restore_project(store, project_id: str, snapshot: dict, written_at: str) -> None:
    """Undo our own project write only; a later write by someone else wins."""
    try:
        store.update(PROJECTS, project_id, snapshot, expected={"updated_at": written_at})
    except ConflictError:
        logger.warning(f"Project {project_id} changed after our write; rollback skipped")
    except VolunteerError as rollback_error:
        logger.error(f"Rollback of project {project_id} failed: {rollback_error.message}")


def reject_edit_request(store, actor, request_id: str, admin_notes: Optional[str] = None) -> dict:
    notes = admin_notes.strip() if admin_notes and admin_notes.strip() else None
    return transition(
        store, EDIT_REQUESTS, request_id, actor,
        ModerationStatus.rejected, kind="Edit request",
        extra={"admin_notes": notes},
    )


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def list_pending_edit_requests(store, actor) -> list:
    require_admin(actor)
    requests = store.read(
        EDIT_REQUESTS,
        {"status": ModerationStatus.pending.value},
        order="created_at",
        desc=True,
    )
    requests = attach_projects(store, requests)
    return attach_profiles(store, requests, "user_id", "requester")


def list_user_edit_requests(store, user_id: str) -> list:
    requests = store.read(EDIT_REQUESTS, {"user_id": user_id}, order="created_at", desc=True)
    requests = attach_projects(store, requests)
    return attach_profiles(store, requests, "reviewed_by", "reviewer")
