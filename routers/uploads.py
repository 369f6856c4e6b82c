# routers/uploads.py

from fastapi import APIRouter, Depends, File, UploadFile

from core.config import settings
from core.errors import ValidationError
from core.store import SupabaseStore
from dependencies.auth import get_current_user, CurrentUser
from dependencies.store import get_store
from services.thumbnails import upload_thumbnail


router = APIRouter(
    prefix="/uploads",
    tags=["Uploads"],
)


@router.post("/thumbnail", status_code=201, summary="Upload a project thumbnail")
async def upload_project_thumbnail(
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    """
    Accepts image/* up to THUMBNAIL_MAX_BYTES. The returned URL goes into a
    project or edit request's thumbnail_url.
    """
    # Cheap rejection before buffering the whole body
    if file.size is not None and file.size > settings.THUMBNAIL_MAX_BYTES:
        raise ValidationError(
            f"Image must be smaller than {settings.THUMBNAIL_MAX_BYTES // (1024 * 1024)}MB"
        )

    data = await file.read()
    url = upload_thumbnail(store, current_user, file.filename, file.content_type, data)
    return {"thumbnail_url": url}
