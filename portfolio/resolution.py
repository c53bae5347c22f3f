# portfolio/resolution.py
from __future__ import annotations

import logging

from utils.helpers import unique_filename

from .storage import ObjectStorage

log = logging.getLogger("app")


def upload_media(upload, storage: ObjectStorage, bucket: str, prefix: str = "") -> str:
    """Push an uploaded file to ``bucket`` and return its public URL."""
    if storage is None:
        raise ValueError("an upload needs an object storage")
    filename = unique_filename(getattr(upload, "name", "") or "file", prefix=prefix)
    stored = storage.upload(bucket, filename, upload, getattr(upload, "content_type", None))
    url = storage.public_url(bucket, stored)
    log.info("Uploaded %s (%s bytes) to %s", stored, getattr(upload, "size", "?"), bucket)
    return url


def resolve_media_url(
    *,
    upload=None,
    pasted: str | None = None,
    previous: str | None = None,
    editing: bool = False,
    storage: ObjectStorage | None = None,
    bucket: str = "project-images",
) -> str | None:
    """
    Pick the single media URL to persist for a project form.

    - a file uploaded with this submission always wins, even over a pasted URL
    - otherwise a non-blank pasted URL is kept as typed (trimmed, unvalidated)
    - a pasted field submitted blank clears the media, on create and edit alike
    - a pasted field that was not submitted at all means "no change": nothing
      on create, ``previous`` on edit
    """
    if upload:
        return upload_media(upload, storage, bucket)
    if pasted is not None:
        return pasted.strip() or None
    return previous if editing else None
