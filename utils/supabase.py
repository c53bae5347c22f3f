# utils/supabase.py
"""Minimal client for a Supabase project's PostgREST and Storage endpoints."""
import requests

USER_AGENT = "folio-site"


class SupabaseError(Exception):
    pass


def _error_message(r) -> str:
    try:
        data = r.json()
    except ValueError:
        return (r.text or r.reason or f"HTTP {r.status_code}").strip()
    if isinstance(data, dict):
        for key in ("message", "error_description", "error", "msg"):
            if data.get(key):
                return str(data[key])
    return f"HTTP {r.status_code}"


class SupabaseClient:
    def __init__(self, url: str, key: str, timeout: int = 10, session=None):
        if not url or not key:
            raise SupabaseError("Supabase URL and key are required")
        self.url = url.rstrip("/")
        self.key = key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, extra=None):
        headers = {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "User-Agent": USER_AGENT,
        }
        if extra:
            headers.update(extra)
        return headers

    def _call(self, method: str, path: str, *, params=None, json=None, data=None, headers=None):
        try:
            r = self.session.request(
                method,
                f"{self.url}{path}",
                params=params,
                json=json,
                data=data,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SupabaseError(str(exc)) from exc
        if r.status_code >= 400:
            raise SupabaseError(_error_message(r))
        return r

    # ---- PostgREST ----------------------------------------------------------
    def select(self, table: str, order: str | None = None, single: bool = False):
        params = {"select": "*"}
        if order:
            params["order"] = f"{order}.asc"
        headers = {"Accept": "application/vnd.pgrst.object+json"} if single else None
        return self._call("GET", f"/rest/v1/{table}", params=params, headers=headers).json()

    def insert(self, table: str, row: dict) -> dict:
        r = self._call("POST", f"/rest/v1/{table}", json=row, headers={"Prefer": "return=representation"})
        rows = r.json()
        if not rows:
            raise SupabaseError(f"insert into {table} returned no row")
        return rows[0]

    def update(self, table: str, record_id, patch: dict) -> list:
        r = self._call(
            "PATCH", f"/rest/v1/{table}",
            params={"id": f"eq.{record_id}"},
            json=patch,
            headers={"Prefer": "return=representation"},
        )
        return r.json()

    def delete(self, table: str, record_id) -> list:
        r = self._call(
            "DELETE", f"/rest/v1/{table}",
            params={"id": f"eq.{record_id}"},
            headers={"Prefer": "return=representation"},
        )
        return r.json()

    # ---- Storage ------------------------------------------------------------
    def upload(self, bucket: str, path: str, data, content_type: str | None = None):
        # file objects go out as a streamed body
        headers = {"Content-Type": content_type or "application/octet-stream"}
        self._call("POST", f"/storage/v1/object/{bucket}/{path}", data=data, headers=headers)
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{bucket}/{path}"
