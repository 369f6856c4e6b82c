# -------------------------
# Enums
# -------------------------
from .enums import (
    ModerationStatus,
    UserRole,
)

# -------------------------
# Profiles
# -------------------------
from .profile import Profile, ProfileSummary

# -------------------------
# Projects
# -------------------------
from .project import (
    ProjectFields,
    ProjectCreate,
    ProjectSummary,
    Project,
)

# -------------------------
# Edit Requests
# -------------------------
from .edit_request import (
    EditRequestCreate,
    ProjectEditRequest,
    ReviewDecision,
)

# -------------------------
# Signups
# -------------------------
from .signup import ProjectSignup

# -------------------------
# Hour Submissions
# -------------------------
from .hour_submission import (
    HourSubmissionCreate,
    HourSubmission,
    HoursSummary,
)

# -------------------------
# Auth Models
# -------------------------
from .auth import (
    Identity,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RegisterResponse,
    BootstrapStatus,
)

__all__ = [
    # enums
    "ModerationStatus",
    "UserRole",

    # profiles
    "Profile",
    "ProfileSummary",

    # projects
    "ProjectFields",
    "ProjectCreate",
    "ProjectSummary",
    "Project",

    # edit requests
    "EditRequestCreate",
    "ProjectEditRequest",
    "ReviewDecision",

    # signups
    "ProjectSignup",

    # hours
    "HourSubmissionCreate",
    "HourSubmission",
    "HoursSummary",

    # auth
    "Identity",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "RegisterResponse",
    "BootstrapStatus",
]
