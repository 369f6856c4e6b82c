# services/validation.py

"""
Admission checks run before any write reaches the store.
Every failure raises core.errors.ValidationError.
"""

from datetime import date as date_cls
from typing import Optional

from core.config import settings
from core.errors import ValidationError


PROJECT_HOURS_RANGE = (1, 99)
SUBMISSION_HOURS_RANGE = (1, 24)


def require_text(value: Optional[str], field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def require_int_in_range(value, field: str, bounds: tuple) -> int:
    low, high = bounds
    # bool is an int subclass; True must not count as 1 hour
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be a whole number")
    if value < low or value > high:
        raise ValidationError(f"{field} must be between {low} and {high}")
    return value


def require_iso_date(value: Optional[str], field: str = "date") -> str:
    text = require_text(value, field)
    try:
        date_cls.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")
    return text


def normalize_thumbnail(url: Optional[str]) -> Optional[str]:
    """Empty strings and None both mean 'no thumbnail'."""
    if url is None:
        return None
    url = url.strip()
    return url or None


def validate_project_fields(fields: dict) -> dict:
    """Validate and normalize the editable project fields."""
    return {
        "title": require_text(fields.get("title"), "title"),
        "description": require_text(fields.get("description"), "description"),
        "expected_hours": require_int_in_range(
            fields.get("expected_hours"), "expected_hours", PROJECT_HOURS_RANGE
        ),
        "location": require_text(fields.get("location"), "location"),
        "date": require_iso_date(fields.get("date")),
        "thumbnail_url": normalize_thumbnail(fields.get("thumbnail_url")),
    }


def validate_hours(hours) -> int:
    return require_int_in_range(hours, "hours_completed", SUBMISSION_HOURS_RANGE)


def validate_description(description: Optional[str]) -> str:
    return require_text(description, "description")


def validate_thumbnail(content_type: Optional[str], size: int) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("Please select an image file")
    if size > settings.THUMBNAIL_MAX_BYTES:
        max_mb = settings.THUMBNAIL_MAX_BYTES // (1024 * 1024)
        raise ValidationError(f"Image must be smaller than {max_mb}MB")
    if size == 0:
        raise ValidationError("Image file is empty")
