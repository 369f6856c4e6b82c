# routers/hours.py

from fastapi import APIRouter, Depends

from core.store import SupabaseStore
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.hour_submission import HourSubmission, HourSubmissionCreate, HoursSummary
from services.hours import hours_summary, submit_hours


router = APIRouter(
    prefix="/hours",
    tags=["Hours"],
)


@router.get("", response_model=HoursSummary, summary="My submissions and progress")
def my_hours(
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return hours_summary(store, current_user.id)


@router.post("", response_model=HourSubmission, status_code=201, summary="Submit hours for review")
def create_submission(
    payload: HourSubmissionCreate,
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return submit_hours(
        store,
        current_user,
        payload.project_id,
        payload.hours_completed,
        payload.description,
    )
