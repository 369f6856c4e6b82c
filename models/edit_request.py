# models/edit_request.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from models.enums import ModerationStatus
from models.profile import ProfileSummary
from models.project import ProjectFields, ProjectSummary


class EditRequestCreate(ProjectFields):
    """Full replacement values proposed for a project's editable fields."""
    pass


class ProjectEditRequest(ProjectFields):
    id: str
    project_id: str
    user_id: str
    status: ModerationStatus
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Related rows, filled in on listings
    project: Optional[ProjectSummary] = None
    requester: Optional[ProfileSummary] = None
    reviewer: Optional[ProfileSummary] = None

    model_config = {"from_attributes": True}


class ReviewDecision(BaseModel):
    """Optional body for admin approve/reject calls."""
    admin_notes: Optional[str] = Field(None, description="Shown to the requester (edit requests only)")
