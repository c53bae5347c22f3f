# portfolio/store.py
"""
Record stores: where projects and the settings row actually live.

Every backend speaks the same five calls over plain dict rows and raises
StoreError with the backend's own message on failure.
"""
from __future__ import annotations

import abc
import logging

from django.conf import settings
from django.db import DatabaseError

from utils.supabase import SupabaseClient, SupabaseError

from .errors import StoreError
from .models import Project, SiteSettings

log = logging.getLogger("app")

PROJECTS = "projects"
SETTINGS = "settings"


class RecordStore(abc.ABC):
    # whether select_all/select_one may run on worker threads
    concurrent_reads = False

    @abc.abstractmethod
    def select_all(self, table: str, order_by: str | None = None) -> list[dict]: ...

    @abc.abstractmethod
    def select_one(self, table: str) -> dict: ...

    @abc.abstractmethod
    def insert(self, table: str, row: dict) -> dict: ...

    @abc.abstractmethod
    def update(self, table: str, record_id, patch: dict) -> bool: ...

    @abc.abstractmethod
    def delete(self, table: str, record_id) -> bool: ...


class OrmRecordStore(RecordStore):
    """Rows in the Django database. Reads stay on the request's connection."""

    models = {PROJECTS: Project, SETTINGS: SiteSettings}

    def _model(self, table):
        try:
            return self.models[table]
        except KeyError:
            raise StoreError(f"unknown table {table!r}") from None

    def select_all(self, table, order_by=None):
        qs = self._model(table).objects.all()
        if order_by:
            qs = qs.order_by(order_by, "pk")
        try:
            return list(qs.values())
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc

    def select_one(self, table):
        try:
            row = self._model(table).objects.order_by("pk").values().first()
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc
        if row is None:
            raise StoreError(f"no rows in {table}")
        return row

    def insert(self, table, row):
        model = self._model(table)
        try:
            obj = model.objects.create(**row)
            return model.objects.filter(pk=obj.pk).values().get()
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc

    def update(self, table, record_id, patch):
        try:
            return self._model(table).objects.filter(pk=record_id).update(**patch) > 0
        except (DatabaseError, ValueError) as exc:
            raise StoreError(str(exc)) from exc

    def delete(self, table, record_id):
        try:
            deleted, _ = self._model(table).objects.filter(pk=record_id).delete()
        except ValueError:
            # id of the wrong shape for this table
            return False
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc
        return deleted > 0


class SupabaseRecordStore(RecordStore):
    concurrent_reads = True

    def __init__(self, client: SupabaseClient):
        self.client = client

    def select_all(self, table, order_by=None):
        try:
            return self.client.select(table, order=order_by)
        except SupabaseError as exc:
            raise StoreError(str(exc)) from exc

    def select_one(self, table):
        try:
            return self.client.select(table, single=True)
        except SupabaseError as exc:
            raise StoreError(str(exc)) from exc

    def insert(self, table, row):
        try:
            return self.client.insert(table, row)
        except SupabaseError as exc:
            raise StoreError(str(exc)) from exc

    def update(self, table, record_id, patch):
        try:
            return bool(self.client.update(table, record_id, patch))
        except SupabaseError as exc:
            raise StoreError(str(exc)) from exc

    def delete(self, table, record_id):
        try:
            return bool(self.client.delete(table, record_id))
        except SupabaseError as exc:
            raise StoreError(str(exc)) from exc


def supabase_client() -> SupabaseClient:
    try:
        return SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_KEY, timeout=settings.SUPABASE_TIMEOUT)
    except SupabaseError as exc:
        raise StoreError(str(exc)) from exc


def get_record_store() -> RecordStore:
    backend = getattr(settings, "PORTFOLIO_BACKEND", "orm")
    if backend == "supabase":
        return SupabaseRecordStore(supabase_client())
    if backend != "orm":
        log.warning("Unknown PORTFOLIO_BACKEND %r, using orm", backend)
    return OrmRecordStore()
