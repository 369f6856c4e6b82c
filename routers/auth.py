from fastapi import APIRouter, Depends, Request

from core.logging_config import logger
from core.rate_limiter import LOGIN_LIMIT, REGISTER_LIMIT, account_identifier, require_rate_limit
from core.store import SupabaseStore
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from models.auth import (
    BootstrapStatus,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from models.profile import Profile
from services.profiles import can_self_promote, get_profile, register_user


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(
    payload: LoginRequest,
    request: Request,
    store: SupabaseStore = Depends(get_store),
):
    email = payload.email.strip().lower()

    require_rate_limit(request, LOGIN_LIMIT, identifier=account_identifier(email))

    identity = store.authenticate(email, payload.password)
    return TokenResponse(access_token=identity.access_token)


# ============================================================
# REGISTER (+ optional first-admin bootstrap)
# ============================================================
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=201,
    summary="Create an account",
    description="""
    Creates a Supabase Auth user and its volunteer profile.

    `make_admin` is only honoured while no admin exists. If another
    registration created the first admin in the meantime, the account is
    still created as a regular volunteer and `admin_granted` is false.
    """,
)
def register(
    payload: RegisterRequest,
    request: Request,
    store: SupabaseStore = Depends(get_store),
):
    require_rate_limit(request, REGISTER_LIMIT)

    profile, admin_granted, token = register_user(
        store,
        payload.email,
        payload.password,
        payload.full_name,
        make_admin=payload.make_admin,
    )
    return RegisterResponse(profile=profile, admin_granted=admin_granted, access_token=token)


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", response_model=Profile, summary="Current user's profile")
def read_me(
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    return get_profile(store, current_user.id)


# ============================================================
# ADMIN BOOTSTRAP GATE
# ============================================================
@router.get("/bootstrap", response_model=BootstrapStatus, summary="Can a new user become the first admin?")
def bootstrap_status(store: SupabaseStore = Depends(get_store)):
    """Re-read on every call; never cached."""
    allowed = can_self_promote(store)
    logger.info(f"Bootstrap gate checked: can_self_promote={allowed}")
    return BootstrapStatus(can_self_promote=allowed)
