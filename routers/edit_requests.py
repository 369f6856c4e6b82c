# routers/edit_requests.py

from typing import List

from fastapi import APIRouter, Depends

from core.store import SupabaseStore
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.edit_request import ProjectEditRequest
from services.edit_requests import list_user_edit_requests


router = APIRouter(
    prefix="/edit-requests",
    tags=["Edit Requests"],
)


@router.get("", response_model=List[ProjectEditRequest], summary="My edit requests and their outcome")
def my_edit_requests(
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return list_user_edit_requests(store, current_user.id)
