# portfolio/storage.py
"""Object storage for uploaded project media and profile pictures."""
from __future__ import annotations

import abc

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from utils.supabase import SupabaseClient, SupabaseError

from .errors import StoreError
from .store import supabase_client


class ObjectStorage(abc.ABC):
    @abc.abstractmethod
    def upload(self, bucket: str, filename: str, content, content_type: str | None = None) -> str:
        """
        Store ``content`` (an uploaded file, any file object, or bytes) without
        reading it into memory first; returns the filename it was stored under.
        """

    @abc.abstractmethod
    def public_url(self, bucket: str, filename: str) -> str: ...


class DjangoObjectStorage(ObjectStorage):
    """Buckets are top-level folders of ``default_storage`` (MEDIA_ROOT, S3, ...)."""

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def upload(self, bucket, filename, content, content_type=None):
        if isinstance(content, bytes):
            content = ContentFile(content)
        try:
            # Storage.save copies chunk by chunk (or moves a temp file)
            saved = self.storage.save(f"{bucket}/{filename}", content)
        except OSError as exc:
            raise StoreError(str(exc)) from exc
        return saved.split("/", 1)[1] if "/" in saved else saved

    def public_url(self, bucket, filename):
        return self.storage.url(f"{bucket}/{filename}")


class SupabaseObjectStorage(ObjectStorage):
    def __init__(self, client: SupabaseClient):
        self.client = client

    def upload(self, bucket, filename, content, content_type=None):
        try:
            return self.client.upload(bucket, filename, content, content_type)
        except SupabaseError as exc:
            raise StoreError(str(exc)) from exc

    def public_url(self, bucket, filename):
        return self.client.public_url(bucket, filename)


def get_object_storage() -> ObjectStorage:
    if getattr(settings, "PORTFOLIO_BACKEND", "orm") == "supabase":
        return SupabaseObjectStorage(supabase_client())
    return DjangoObjectStorage()
