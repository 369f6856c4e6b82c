# services/projects.py

from typing import Optional

from core.errors import NotFoundError, PermissionDeniedError, StorageError
from core.logging_config import logger
from models.enums import ModerationStatus, UserRole
from services.embeds import attach_creators
from services.signups import signed_up_project_ids
from services.thumbnails import delete_thumbnail
from services.validation import validate_project_fields
from services.workflow import require_admin, transition


PROJECTS = "projects"
SEARCH_FIELDS = ("title", "description", "location")


# -----------------------------------------------------
# Create
# -----------------------------------------------------
def create_project(store, actor, fields: dict) -> dict:
    """New projects always start pending, whoever creates them."""
    row = validate_project_fields(fields)
    row["status"] = ModerationStatus.pending.value
    row["created_by"] = actor.id

    project = store.insert(PROJECTS, row)
    logger.info(f"User {actor.id} created project {project['id']}")
    return project


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def matches_search(project: dict, term: str) -> bool:
    term = term.lower()
    return any(term in (project.get(field) or "").lower() for field in SEARCH_FIELDS)


def list_approved_projects(store, search: Optional[str] = None, user_id: Optional[str] = None) -> list:
    projects = store.read(PROJECTS, {"status": ModerationStatus.approved.value}, order="date")

    if search and search.strip():
        projects = [p for p in projects if matches_search(p, search.strip())]

    if user_id:
        joined = signed_up_project_ids(store, user_id)
        projects = [{**p, "signed_up": p["id"] in joined} for p in projects]

    return attach_creators(store, projects)


def list_created_projects(store, user_id: str) -> list:
    projects = store.read(PROJECTS, {"created_by": user_id}, order="created_at", desc=True)
    return attach_creators(store, projects)


def list_pending_projects(store, actor) -> list:
    require_admin(actor)
    projects = store.read(
        PROJECTS,
        {"status": ModerationStatus.pending.value},
        order="created_at",
        desc=True,
    )
    return attach_creators(store, projects)


def get_project(store, actor, project_id: str) -> dict:
    """Approved projects are public; others only to their creator and admins."""
    project = store.read_one(PROJECTS, project_id)
    visible = (
        project.get("status") == ModerationStatus.approved.value
        or project.get("created_by") == actor.id
        or str(actor.role) == UserRole.admin.value
    )
    if not visible:
        raise NotFoundError(f"Project {project_id} not found")
    return project


# -----------------------------------------------------
# Delete (creator only)
# -----------------------------------------------------
def delete_project(store, actor, project_id: str) -> None:
    project = store.read_one(PROJECTS, project_id)
    if project.get("created_by") != actor.id:
        raise PermissionDeniedError("Only the project's creator can delete it")

    store.delete(PROJECTS, project_id)
    logger.info(f"User {actor.id} deleted project {project_id}")

    try:
        delete_thumbnail(store, project.get("thumbnail_url"))
    except StorageError as e:
        logger.warning(f"Orphaned thumbnail for deleted project {project_id}: {e.message}")


# -----------------------------------------------------
# Admin decisions
# -----------------------------------------------------
def approve_project(store, actor, project_id: str) -> dict:
    return transition(
        store, PROJECTS, project_id, actor,
        ModerationStatus.approved, kind="Project", stamp_reviewer=False,
    )


def reject_project(store, actor, project_id: str) -> dict:
    return transition(
        store, PROJECTS, project_id, actor,
        ModerationStatus.rejected, kind="Project", stamp_reviewer=False,
    )
