# services/signups.py

from core.errors import ConflictError, NotFoundError, ValidationError
from core.logging_config import logger
from models.enums import ModerationStatus
from services.embeds import attach_creators


PROJECTS = "projects"
PROJECT_SIGNUPS = "project_signups"


def find_signup(store, user_id: str, project_id: str):
    rows = store.read(PROJECT_SIGNUPS, {"user_id": user_id, "project_id": project_id}, limit=1)
    return rows[0] if rows else None


def is_signed_up(store, user_id: str, project_id: str) -> bool:
    return find_signup(store, user_id, project_id) is not None


def sign_up(store, actor, project_id: str) -> dict:
    project = store.read_one(PROJECTS, project_id)
    if project.get("status") != ModerationStatus.approved.value:
        raise ValidationError("Only approved projects accept volunteers")

    if is_signed_up(store, actor.id, project_id):
        raise ConflictError("You are already signed up for this project")

    # The (project_id, user_id) unique constraint still guards concurrent joins
    signup = store.insert(PROJECT_SIGNUPS, {"project_id": project_id, "user_id": actor.id})
    logger.info(f"User {actor.id} signed up for project {project_id}")
    return signup


def withdraw(store, actor, project_id: str) -> None:
    if not is_signed_up(store, actor.id, project_id):
        raise NotFoundError("You are not signed up for this project")

    store.delete(PROJECT_SIGNUPS, filters={"project_id": project_id, "user_id": actor.id})
    logger.info(f"User {actor.id} withdrew from project {project_id}")


def signed_up_project_ids(store, user_id: str) -> set:
    return {row["project_id"] for row in store.read(PROJECT_SIGNUPS, {"user_id": user_id})}


def list_signed_up_projects(store, user_id: str) -> list:
    # Projects deleted after the signup simply drop out of the batch read
    projects = store.read_many(PROJECTS, "id", sorted(signed_up_project_ids(store, user_id)))
    projects = [{**p, "signed_up": True} for p in projects]
    return attach_creators(store, sorted(projects, key=lambda p: p.get("date") or ""))
