# models/hour_submission.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from models.enums import ModerationStatus
from models.profile import ProfileSummary
from models.project import ProjectSummary


class HourSubmissionCreate(BaseModel):
    project_id: str
    hours_completed: int = Field(..., strict=True, description="Whole hours, 1-24")
    description: str


class HourSubmission(BaseModel):
    id: str
    project_id: str
    user_id: str
    hours_completed: int
    description: str
    status: ModerationStatus
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None

    # Related rows, filled in on listings
    project: Optional[ProjectSummary] = None
    submitter: Optional[ProfileSummary] = None

    model_config = {"from_attributes": True}


class HoursSummary(BaseModel):
    approved_hours: int
    pending_hours: int
    goal_hours: int
    progress_percent: float
    goal_reached: bool
    submissions: List[HourSubmission] = []
