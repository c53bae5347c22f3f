import io

import pytest
import requests

from portfolio.catalog import Catalog
from portfolio.errors import FetchError, StoreError
from portfolio.storage import SupabaseObjectStorage
from portfolio.store import SupabaseRecordStore
from utils.supabase import SupabaseClient, SupabaseError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.payload = payload
        self.text = text
        self.reason = "Error"

    def json(self):
        if self.payload is None:
            raise ValueError("no json")
        return self.payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def _client(*responses):
    session = FakeSession(*responses)
    return SupabaseClient("https://abc.supabase.co/", "anon-key", timeout=3, session=session), session


def test_select_sends_auth_and_order():
    client, session = _client(FakeResponse(payload=[{"id": "u1"}]))
    assert client.select("projects", order="display_order") == [{"id": "u1"}]
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://abc.supabase.co/rest/v1/projects"
    assert kwargs["params"] == {"select": "*", "order": "display_order.asc"}
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert kwargs["timeout"] == 3


def test_single_row_select_asks_for_an_object():
    client, session = _client(FakeResponse(payload={"id": "s1"}))
    assert client.select("settings", single=True) == {"id": "s1"}
    assert session.calls[0][2]["headers"]["Accept"] == "application/vnd.pgrst.object+json"


def test_error_message_is_passed_through():
    client, _ = _client(FakeResponse(status_code=400, payload={"message": "new row violates row-level security policy"}))
    with pytest.raises(SupabaseError, match="row-level security"):
        client.insert("projects", {"title": "x"})


def test_non_json_error_uses_body_text():
    client, _ = _client(FakeResponse(status_code=502, text="Bad gateway"))
    with pytest.raises(SupabaseError, match="Bad gateway"):
        client.delete("projects", "u1")


def test_network_errors_become_supabase_errors():
    client, _ = _client(requests.ConnectionError("connection refused"))
    with pytest.raises(SupabaseError, match="connection refused"):
        client.select("projects")


def test_update_filters_by_id():
    client, session = _client(FakeResponse(payload=[{"id": "u1"}]))
    assert client.update("projects", "u1", {"title": "t"}) == [{"id": "u1"}]
    method, _, kwargs = session.calls[0]
    assert method == "PATCH"
    assert kwargs["params"] == {"id": "eq.u1"}
    assert kwargs["headers"]["Prefer"] == "return=representation"


def test_record_store_maps_empty_representation_to_not_found():
    client, _ = _client(FakeResponse(payload=[]), FakeResponse(payload=[]))
    store = SupabaseRecordStore(client)
    assert store.update("projects", "gone", {"title": "t"}) is False
    assert store.delete("projects", "gone") is False


def test_record_store_wraps_errors():
    client, _ = _client(FakeResponse(status_code=401, payload={"message": "Invalid API key"}))
    with pytest.raises(StoreError, match="Invalid API key"):
        SupabaseRecordStore(client).select_all("projects")


def test_catalog_load_against_supabase():
    client, _ = _client(
        FakeResponse(payload=[
            {"id": "b", "title": "B", "description": "", "tech": ["Go"], "link": "#", "display_order": 1,
             "image_url": None, "created_at": "2024-01-01T00:00:00Z"},
            {"id": "a", "title": "A", "description": "", "tech": None, "link": "#", "display_order": 0,
             "image_url": "https://youtu.be/abc", "created_at": "2024-01-01T00:00:00Z"},
        ]),
        FakeResponse(payload={"id": "s", "profile_image_url": None, "contact_link": "https://t.me/alice"}),
    )
    store = SupabaseRecordStore(client)
    # one-at-a-time responses: keep the reads sequential for this fake session
    store.concurrent_reads = False
    catalog = Catalog(store).load()
    assert [p.id for p in catalog.projects] == ["a", "b"]
    assert catalog.projects[0].tech == []
    assert catalog.projects[0].media.embed == "https://www.youtube.com/embed/abc"
    assert catalog.contact_link == "https://t.me/alice"


def test_catalog_load_reports_supabase_failure():
    client, _ = _client(
        FakeResponse(status_code=500, payload={"message": "upstream timeout"}),
        FakeResponse(payload={"id": "s", "profile_image_url": None, "contact_link": "https://t.me/alice"}),
    )
    store = SupabaseRecordStore(client)
    store.concurrent_reads = False
    catalog = Catalog(store)
    with pytest.raises(FetchError, match="upstream timeout"):
        catalog.load()
    assert catalog.contact_link == "https://t.me/alice"


def test_object_storage_upload_and_public_url():
    client, session = _client(FakeResponse(payload={"Key": "project-images/x.png"}))
    storage = SupabaseObjectStorage(client)
    assert storage.upload("project-images", "x.png", b"png", "image/png") == "x.png"
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "https://abc.supabase.co/storage/v1/object/project-images/x.png"
    assert kwargs["data"] == b"png"
    assert kwargs["headers"]["Content-Type"] == "image/png"
    assert storage.public_url("project-images", "x.png") == (
        "https://abc.supabase.co/storage/v1/object/public/project-images/x.png"
    )


def test_missing_credentials():
    with pytest.raises(SupabaseError):
        SupabaseClient("", "")


def test_object_storage_streams_file_objects():
    client, session = _client(FakeResponse(payload={"Key": "project-images/clip.mp4"}))
    body = io.BytesIO(b"video")
    SupabaseObjectStorage(client).upload("project-images", "clip.mp4", body, "video/mp4")
    _, _, kwargs = session.calls[0]
    assert kwargs["data"] is body
    assert body.tell() == 0
