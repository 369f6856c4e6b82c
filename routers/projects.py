# routers/projects.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.store import SupabaseStore
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.edit_request import EditRequestCreate, ProjectEditRequest
from models.project import Project, ProjectCreate
from models.signup import ProjectSignup
from services import projects as project_service
from services import signups as signup_service
from services.edit_requests import create_edit_request


router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
)


# -----------------------------------------------------
# GET /projects: approved opportunities
# -----------------------------------------------------
@router.get("", response_model=List[Project], summary="Browse approved projects")
def list_projects(
    search: Optional[str] = Query(None, description="Matches title, description or location"),
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.list_approved_projects(store, search=search, user_id=current_user.id)


# -----------------------------------------------------
# POST /projects: lands in the admin review queue
# -----------------------------------------------------
@router.post("", response_model=Project, status_code=201, summary="Propose a project")
def create_project(
    payload: ProjectCreate,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.create_project(store, current_user, payload.model_dump())


@router.get("/mine", response_model=List[Project], summary="Projects I created")
def my_projects(
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.list_created_projects(store, current_user.id)


@router.get("/joined", response_model=List[Project], summary="Projects I signed up for")
def joined_projects(
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return signup_service.list_signed_up_projects(store, current_user.id)


@router.get("/{project_id}", response_model=Project)
def get_project(
    project_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return project_service.get_project(store, current_user, project_id)


@router.delete("/{project_id}", summary="Delete a project I created")
def delete_project(
    project_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    project_service.delete_project(store, current_user, project_id)
    return {"status": "deleted", "project_id": project_id}


# -----------------------------------------------------
# Signup / withdraw
# -----------------------------------------------------
@router.post("/{project_id}/signup", response_model=ProjectSignup, status_code=201)
def sign_up(
    project_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return signup_service.sign_up(store, current_user, project_id)


@router.delete("/{project_id}/signup")
def withdraw(
    project_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    signup_service.withdraw(store, current_user, project_id)
    return {"status": "withdrawn", "project_id": project_id}


# -----------------------------------------------------
# Edit requests (creator only, reviewed by an admin)
# -----------------------------------------------------
@router.post(
    "/{project_id}/edit-requests",
    response_model=ProjectEditRequest,
    status_code=201,
    summary="Submit an edit for admin approval",
)
def request_edit(
    project_id: str,
    payload: EditRequestCreate,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return create_edit_request(store, current_user, project_id, payload.model_dump())
