from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Volunteer Hours API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAIN: Optional[str] = Field(None, env="FRONTEND_DOMAIN")

    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (DB, Auth, Storage)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Project thumbnails (Supabase Storage)
    # -------------------------------------------------
    THUMBNAIL_BUCKET: str = Field("project-thumbnails", env="THUMBNAIL_BUCKET")
    THUMBNAIL_MAX_BYTES: int = Field(5 * 1024 * 1024, env="THUMBNAIL_MAX_BYTES", description="Largest accepted thumbnail upload (default: 5MB)")

    # -------------------------------------------------
    # Profile provisioning
    # -------------------------------------------------
    # Profiles may be created by a database trigger after sign-up, so reads
    # right after registration poll for a bounded time before inserting.
    PROFILE_POLL_ATTEMPTS: int = Field(5, env="PROFILE_POLL_ATTEMPTS")
    PROFILE_POLL_INTERVAL_SECONDS: float = Field(0.5, env="PROFILE_POLL_INTERVAL_SECONDS")

    # -------------------------------------------------
    # Volunteer goal shown on the hours dashboard
    # -------------------------------------------------
    HOURS_GOAL: int = Field(80, env="HOURS_GOAL")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

if settings.FRONTEND_DOMAIN:
    domain = settings.FRONTEND_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

cors_origins.extend([d.rstrip("/") for d in settings.FRONTEND_ORIGINS])

settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
