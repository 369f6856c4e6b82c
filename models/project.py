# models/project.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from models.enums import ModerationStatus
from models.profile import ProfileSummary


class ProjectFields(BaseModel):
    """The editable fields of a project (also what an edit request proposes)."""
    title: str = Field(..., description="Short name of the service opportunity")
    description: str
    expected_hours: int = Field(..., strict=True, description="Expected hours, 1-99")
    location: str
    date: str = Field(..., description="ISO date, e.g. 2026-05-01")
    thumbnail_url: Optional[str] = Field(None, description="Public URL from POST /uploads/thumbnail")


class ProjectCreate(ProjectFields):
    pass


class ProjectSummary(BaseModel):
    """The parts of a project shown next to submissions and edit requests."""
    id: str
    title: str
    expected_hours: Optional[int] = None
    created_by: Optional[str] = None


class Project(ProjectFields):
    id: str
    status: ModerationStatus
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Only populated on listings
    signed_up: Optional[bool] = None
    creator: Optional[ProfileSummary] = None

    model_config = {"from_attributes": True}
