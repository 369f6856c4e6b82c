from typing import Optional
from datetime import datetime
from pydantic import BaseModel


# --------------------------------------------------------------------
# PROJECT SIGNUP: join record between a profile and an approved project.
# Existence is the state; there is no status column.
# --------------------------------------------------------------------
class ProjectSignup(BaseModel):
    id: str
    project_id: str
    user_id: str
    created_at: Optional[datetime] = None
