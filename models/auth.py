from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from models.profile import Profile


# -----------------------------------------------------
# IDENTITY (Supabase Auth user, not the app profile)
# -----------------------------------------------------
class Identity(BaseModel):
    id: str
    email: str
    full_name: str = ""
    access_token: Optional[str] = None


# -----------------------------------------------------
# LOGIN REQUEST (using Supabase email/password)
# -----------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -----------------------------------------------------
# REGISTER REQUEST
# -----------------------------------------------------
class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = ""

    # Honoured only while no admin exists yet
    make_admin: bool = False


# -----------------------------------------------------
# TOKEN RESPONSE (Supabase session JWT)
# -----------------------------------------------------
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RegisterResponse(BaseModel):
    profile: Profile
    admin_granted: bool = False

    # None when Supabase requires email confirmation first
    access_token: Optional[str] = None


class BootstrapStatus(BaseModel):
    can_self_promote: bool
