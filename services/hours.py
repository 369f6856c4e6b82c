# services/hours.py

from collections import defaultdict
from typing import Dict

from core.config import settings
from core.errors import PermissionDeniedError
from core.logging_config import logger
from models.enums import ModerationStatus
from services.embeds import attach_profiles, attach_projects
from services.signups import is_signed_up
from services.validation import validate_description, validate_hours
from services.workflow import require_admin, transition


HOUR_SUBMISSIONS = "hour_submissions"


# -----------------------------------------------------
# Submit
# -----------------------------------------------------
def submit_hours(store, actor, project_id: str, hours_completed, description: str) -> dict:
    hours = validate_hours(hours_completed)
    description = validate_description(description)

    if not is_signed_up(store, actor.id, project_id):
        raise PermissionDeniedError("Sign up for this project before submitting hours")

    submission = store.insert(
        HOUR_SUBMISSIONS,
        {
            "project_id": project_id,
            "user_id": actor.id,
            "hours_completed": hours,
            "description": description,
            "status": ModerationStatus.pending.value,
        },
    )
    logger.info(f"User {actor.id} submitted {hours}h for project {project_id}")
    return submission


# -----------------------------------------------------
# Admin decisions
# -----------------------------------------------------
def approve_submission(store, actor, submission_id: str) -> dict:
    return transition(
        store, HOUR_SUBMISSIONS, submission_id, actor,
        ModerationStatus.approved, kind="Hour submission",
    )


def reject_submission(store, actor, submission_id: str) -> dict:
    return transition(
        store, HOUR_SUBMISSIONS, submission_id, actor,
        ModerationStatus.rejected, kind="Hour submission",
    )


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def list_user_submissions(store, user_id: str) -> list:
    submissions = store.read(HOUR_SUBMISSIONS, {"user_id": user_id}, order="submitted_at", desc=True)
    return attach_projects(store, submissions)


def list_pending_submissions(store, actor) -> list:
    require_admin(actor)
    submissions = store.read(
        HOUR_SUBMISSIONS,
        {"status": ModerationStatus.pending.value},
        order="submitted_at",
        desc=True,
    )
    submissions = attach_projects(store, submissions)
    return attach_profiles(store, submissions, "user_id", "submitter")


def approved_total(store, user_id: str) -> int:
    """Authoritative total: sum over the user's approved submissions."""
    rows = store.read(
        HOUR_SUBMISSIONS,
        {"user_id": user_id, "status": ModerationStatus.approved.value},
    )
    return sum(row["hours_completed"] for row in rows)


def approved_totals(store) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for row in store.read(HOUR_SUBMISSIONS, {"status": ModerationStatus.approved.value}):
        totals[row["user_id"]] += row["hours_completed"]
    return dict(totals)


def hours_summary(store, user_id: str) -> dict:
    submissions = list_user_submissions(store, user_id)

    approved = sum(
        s["hours_completed"] for s in submissions
        if s["status"] == ModerationStatus.approved.value
    )
    pending = sum(
        s["hours_completed"] for s in submissions
        if s["status"] == ModerationStatus.pending.value
    )
    goal = settings.HOURS_GOAL

    return {
        "approved_hours": approved,
        "pending_hours": pending,
        "goal_hours": goal,
        "progress_percent": min(approved / goal * 100, 100.0) if goal > 0 else 100.0,
        "goal_reached": approved >= goal,
        "submissions": submissions,
    }
