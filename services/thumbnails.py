# services/thumbnails.py

import re
import time
from typing import Optional

from core.config import settings
from core.logging_config import logger
from services.validation import validate_thumbnail


def safe_extension(filename: Optional[str], content_type: str) -> str:
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1]
    if not ext:
        ext = content_type.split("/", 1)[-1]
    return re.sub(r"[^A-Za-z0-9]", "", ext).lower() or "img"


def upload_thumbnail(store, actor, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
    """Validate, then upload to <user_id>/<millis>.<ext>; returns the public URL."""
    validate_thumbnail(content_type, len(data))

    path = f"{actor.id}/{int(time.time() * 1000)}.{safe_extension(filename, content_type)}"
    url = store.upload_blob(settings.THUMBNAIL_BUCKET, path, data, content_type)
    logger.info(f"User {actor.id} uploaded thumbnail {path}")
    return url


def thumbnail_path(url: Optional[str]) -> Optional[str]:
    """Object path inside the bucket for one of our public URLs."""
    if not url:
        return None
    marker = f"/{settings.THUMBNAIL_BUCKET}/"
    if marker not in url:
        return None
    return url.split(marker, 1)[1].split("?", 1)[0] or None


def delete_thumbnail(store, url: Optional[str]) -> bool:
    path = thumbnail_path(url)
    if path is None:
        return False
    store.delete_blob(settings.THUMBNAIL_BUCKET, path)
    return True
