# models/profile.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from models.enums import UserRole


class Profile(BaseModel):
    """
    Application user record (one per Supabase Auth identity).

    total_hours is always the derived sum of approved hour submissions,
    never the value stored on the row.
    """
    id: str
    email: str
    full_name: Optional[str] = ""
    role: UserRole = UserRole.user
    total_hours: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileSummary(BaseModel):
    """Who created, submitted or reviewed something, as shown on listings."""
    id: str
    full_name: Optional[str] = ""
    email: Optional[str] = None
