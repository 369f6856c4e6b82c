# routers/admin.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from core.permission_helpers import requires_permission
from core.store import SupabaseStore
from dependencies.auth import CurrentUser
from dependencies.store import get_store
from models.edit_request import ProjectEditRequest, ReviewDecision
from models.hour_submission import HourSubmission
from models.profile import Profile
from models.project import Project
from services import edit_requests as edit_request_service
from services import hours as hours_service
from services import profiles as profile_service
from services import projects as project_service


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
)


# -----------------------------------------------------
# Projects
# -----------------------------------------------------
@router.get("/projects/pending", response_model=List[Project], summary="Projects awaiting review")
def pending_projects(
    current_user: CurrentUser = Depends(requires_permission("projects:review")),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.list_pending_projects(store, current_user)


@router.post("/projects/{project_id}/approve", response_model=Project)
def approve_project(
    project_id: str,
    current_user: CurrentUser = Depends(requires_permission("projects:review")),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.approve_project(store, current_user, project_id)


@router.post("/projects/{project_id}/reject", response_model=Project)
def reject_project(
    project_id: str,
    current_user: CurrentUser = Depends(requires_permission("projects:review")),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.reject_project(store, current_user, project_id)


# -----------------------------------------------------
# Hour submissions
# -----------------------------------------------------
@router.get("/hours/pending", response_model=List[HourSubmission], summary="Hour submissions awaiting review")
def pending_hours(
    current_user: CurrentUser = Depends(requires_permission("hours:review")),
    store: SupabaseStore = Depends(get_store),
):
    return hours_service.list_pending_submissions(store, current_user)


@router.post("/hours/{submission_id}/approve", response_model=HourSubmission)
def approve_hours(
    submission_id: str,
    current_user: CurrentUser = Depends(requires_permission("hours:review")),
    store: SupabaseStore = Depends(get_store),
):
    return hours_service.approve_submission(store, current_user, submission_id)


@router.post("/hours/{submission_id}/reject", response_model=HourSubmission)
def reject_hours(
    submission_id: str,
    current_user: CurrentUser = Depends(requires_permission("hours:review")),
    store: SupabaseStore = Depends(get_store),
):
    return hours_service.reject_submission(store, current_user, submission_id)


# -----------------------------------------------------
# Edit requests
# -----------------------------------------------------
@router.get(
    "/edit-requests/pending",
    response_model=List[ProjectEditRequest],
    summary="Edit requests awaiting review",
)
def pending_edit_requests(
    current_user: CurrentUser = Depends(requires_permission("edit_requests:review")),
    store: SupabaseStore = Depends(get_store),
):
    return edit_request_service.list_pending_edit_requests(store, current_user)


@router.post("/edit-requests/{request_id}/approve", response_model=ProjectEditRequest)
def approve_edit_request(
    request_id: str,
    current_user: CurrentUser = Depends(requires_permission("edit_requests:review")),
    store: SupabaseStore = Depends(get_store),
):
    return edit_request_service.approve_edit_request(store, current_user, request_id)


@router.post("/edit-requests/{request_id}/reject", response_model=ProjectEditRequest)
def reject_edit_request(
    request_id: str,
    payload: Optional[ReviewDecision] = None,
    current_user: CurrentUser = Depends(requires_permission("edit_requests:review")),
    store: SupabaseStore = Depends(get_store),
):
    notes = payload.admin_notes if payload else None
    return edit_request_service.reject_edit_request(store, current_user, request_id, notes)


# -----------------------------------------------------
# Volunteers
# -----------------------------------------------------
@router.get("/users", response_model=List[Profile], summary="All volunteers with approved hours")
def list_users(
    current_user: CurrentUser = Depends(requires_permission("users:read")),
    store: SupabaseStore = Depends(get_store),
):
    return profile_service.list_profiles(store, current_user)


@router.post("/users/{user_id}/promote", response_model=Profile, summary="Promote a volunteer to admin")
def promote_user(
    user_id: str,
    current_user: CurrentUser = Depends(requires_permission("users:promote")),
    store: SupabaseStore = Depends(get_store),
):
    return profile_service.promote_user(store, current_user, user_id)
