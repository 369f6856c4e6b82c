# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # ADMIN: moderation queues and user management
    # =====================================================
    "admin": [
        "projects:read", "projects:write",
        "hours:read", "hours:write",
        "edit_requests:write",

        # Moderation decisions
        "projects:review",
        "hours:review",
        "edit_requests:review",

        # Volunteer management
        "users:read",
        "users:promote",
    ],

    # =====================================================
    # VOLUNTEER
    # =====================================================
    "user": [
        "projects:read", "projects:write",
        "hours:read", "hours:write",
        "edit_requests:write",
    ],
}
