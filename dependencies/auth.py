from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from core.store import SupabaseStore
from dependencies.store import get_store
from services.profiles import ensure_profile


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (identity + application profile)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: str = "user"
    full_name: Optional[str] = None


# ============================================================
# AUTH DECODING (Supabase: validates JWT, then loads profile)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    store: SupabaseStore = Depends(get_store),
) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    identity = store.current_identity(credentials.credentials)
    if identity is None:
        raise unauthorized

    # Role always comes from the profiles table, never from token metadata
    profile = ensure_profile(store, identity)

    return CurrentUser(
        id=profile["id"],
        email=profile.get("email") or identity.email,
        role=profile.get("role") or "user",
        full_name=profile.get("full_name"),
    )

