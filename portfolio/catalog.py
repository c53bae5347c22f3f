# portfolio/catalog.py
"""
In-memory mirror of the project list and the settings row.

One Catalog per request. Every write waits for the store to confirm, patches
the local state, then reloads everything from the store.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, fields
from typing import Any, Iterable

from django.conf import settings as django_settings

from .errors import (
    FetchError,
    NotFoundError,
    NotInitializedError,
    StoreError,
    ValidationError,
    WriteError,
)
from .media import MediaReference, classify
from .resolution import resolve_media_url, upload_media
from .storage import ObjectStorage, get_object_storage
from .store import PROJECTS, SETTINGS, RecordStore, get_record_store

log = logging.getLogger("app")

NO_LINK = "#"
SETTINGS_FIELDS = ("profile_image_url", "contact_link")


def split_tech(raw: str | Iterable[str] | None) -> list[str]:
    """'React, Node.js,, MongoDB ' -> ['React', 'Node.js', 'MongoDB'] (blanks dropped)."""
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else raw
    return [t.strip() for t in parts if t and t.strip()]


def _from_row(cls, row: dict):
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in row.items() if k in names})


@dataclass
class ProjectRecord:
    id: Any
    title: str
    description: str = ""
    tech: list[str] = field(default_factory=list)
    link: str = NO_LINK
    display_order: int = 0
    image_url: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "ProjectRecord":
        rec = _from_row(cls, row)
        rec.tech = list(rec.tech or [])
        rec.display_order = int(rec.display_order or 0)
        return rec

    @property
    def media(self) -> MediaReference:
        return classify(self.image_url)


@dataclass
class SettingsRecord:
    id: Any
    profile_image_url: str | None = None
    contact_link: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "SettingsRecord":
        return _from_row(cls, row)


@dataclass
class ProjectDraft:
    """Raw form input for create/edit. ``media_url=None`` means the field wasn't submitted."""
    title: str = ""
    description: str = ""
    tech: str | list[str] = ""
    link: str = ""
    media_url: str | None = None
    upload: Any = None

    def validate(self, creating: bool = True) -> None:
        """Required fields: title always, description on create only."""
        if not (self.title or "").strip():
            raise ValidationError("Please fill in all required fields" if creating else "Title is required")
        if creating and not (self.description or "").strip():
            raise ValidationError("Please fill in all required fields")


def _attempt(read):
    try:
        return read(), None
    except StoreError as exc:
        return None, exc


class Catalog:
    def __init__(
        self,
        store: RecordStore,
        storage: ObjectStorage | None = None,
        *,
        project_bucket: str = "project-images",
        profile_bucket: str = "profile-images",
        default_contact_link: str = "https://t.me/yourusername",
    ):
        self.store = store
        self.storage = storage
        self.project_bucket = project_bucket
        self.profile_bucket = profile_bucket
        self.default_contact_link = default_contact_link
        self.projects: list[ProjectRecord] = []
        self.settings: SettingsRecord | None = None

    @classmethod
    def from_settings(cls) -> "Catalog":
        return cls(
            get_record_store(),
            get_object_storage(),
            project_bucket=django_settings.PORTFOLIO_PROJECT_BUCKET,
            profile_bucket=django_settings.PORTFOLIO_PROFILE_BUCKET,
            default_contact_link=django_settings.PORTFOLIO_DEFAULT_CONTACT_LINK,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def _read_projects(self):
        return self.store.select_all(PROJECTS, order_by="display_order")

    def _read_settings(self):
        return self.store.select_one(SETTINGS)

    def load(self) -> "Catalog":
        """
        Fetch the project list and the settings row. Each result is applied on
        its own; if either read failed, FetchError is raised afterwards.
        """
        reads = (self._read_projects, self._read_settings)
        if self.store.concurrent_reads:
            with ThreadPoolExecutor(max_workers=len(reads)) as pool:
                outcomes = list(pool.map(_attempt, reads))
        else:
            outcomes = [_attempt(read) for read in reads]
        (rows, projects_err), (settings_row, settings_err) = outcomes

        if projects_err is None:
            projects = [ProjectRecord.from_row(r) for r in rows or []]
            # gaps and duplicates are fine; only the value matters
            self.projects = sorted(projects, key=lambda p: p.display_order)
        if settings_err is None and settings_row:
            self.settings = SettingsRecord.from_row(settings_row)

        errors = [str(e) for e in (projects_err, settings_err) if e is not None]
        if errors:
            raise FetchError("; ".join(errors))
        return self

    def _refresh(self):
        try:
            self.load()
        except FetchError as exc:
            log.warning("Refresh after write failed: %s", exc)

    def get(self, project_id) -> ProjectRecord | None:
        key = str(project_id)
        return next((p for p in self.projects if str(p.id) == key), None)

    @property
    def contact_link(self) -> str:
        if self.settings and self.settings.contact_link:
            return self.settings.contact_link
        return self.default_contact_link

    @property
    def profile_image_url(self) -> str | None:
        return self.settings.profile_image_url if self.settings else None

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------
    def _resolve(self, draft: ProjectDraft, previous=None, editing=False):
        try:
            return resolve_media_url(
                upload=draft.upload,
                pasted=draft.media_url,
                previous=previous,
                editing=editing,
                storage=self.storage,
                bucket=self.project_bucket,
            )
        except StoreError as exc:
            raise WriteError(str(exc)) from exc

    def create(self, draft: ProjectDraft) -> ProjectRecord:
        draft.validate()
        row = {
            "title": draft.title.strip(),
            "description": draft.description.strip(),
            "tech": split_tech(draft.tech),
            "link": (draft.link or "").strip() or NO_LINK,
            "display_order": len(self.projects),
            "image_url": self._resolve(draft),
        }
        try:
            created = ProjectRecord.from_row(self.store.insert(PROJECTS, row))
        except StoreError as exc:
            raise WriteError(str(exc)) from exc

        log.info("Project %s created at position %d", created.id, created.display_order)
        self.projects.append(created)
        self._refresh()
        return created

    def update(self, project_id, draft: ProjectDraft) -> ProjectRecord:
        draft.validate(creating=False)
        current = self.get(project_id)
        if current is None:
            raise NotFoundError("Project no longer exists")

        patch = {
            "title": draft.title.strip(),
            "description": (draft.description or "").strip(),
            "tech": split_tech(draft.tech),
            "link": (draft.link or "").strip() or NO_LINK,
            "image_url": self._resolve(draft, previous=current.image_url, editing=True),
        }
        try:
            found = self.store.update(PROJECTS, current.id, patch)
        except StoreError as exc:
            raise WriteError(str(exc)) from exc
        if not found:
            raise NotFoundError("Project no longer exists")

        updated = ProjectRecord(id=current.id, display_order=current.display_order, **patch)
        self.projects = [updated if p is current else p for p in self.projects]
        self._refresh()
        return self.get(current.id) or updated

    def delete(self, project_id) -> None:
        try:
            found = self.store.delete(PROJECTS, project_id)
        except StoreError as exc:
            raise WriteError(str(exc)) from exc
        if not found:
            raise NotFoundError("Project no longer exists")

        key = str(project_id)
        self.projects = [p for p in self.projects if str(p.id) != key]
        log.info("Project %s deleted", project_id)
        self._refresh()

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------
    def update_settings(self, **patch) -> SettingsRecord:
        if self.settings is None:
            raise NotInitializedError("Settings are not loaded yet")
        unknown = set(patch) - set(SETTINGS_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        if not patch:
            raise ValidationError("Nothing to update")

        try:
            found = self.store.update(SETTINGS, self.settings.id, patch)
        except StoreError as exc:
            raise WriteError(str(exc)) from exc
        if not found:
            raise NotFoundError("Settings row no longer exists")

        for name, value in patch.items():
            setattr(self.settings, name, value)
        self._refresh()
        return self.settings

    def upload_profile_image(self, upload) -> SettingsRecord:
        if self.settings is None:
            raise NotInitializedError("Settings are not loaded yet")
        if not upload:
            raise ValidationError("Choose an image to upload")
        try:
            url = upload_media(upload, self.storage, self.profile_bucket, prefix="profile")
        except StoreError as exc:
            raise WriteError(str(exc)) from exc
        return self.update_settings(profile_image_url=url)
