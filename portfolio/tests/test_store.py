import pytest
from django.core.files.uploadedfile import TemporaryUploadedFile

from portfolio.catalog import Catalog, ProjectDraft
from portfolio.errors import StoreError
from portfolio.models import Project, SiteSettings
from portfolio.storage import DjangoObjectStorage, get_object_storage
from portfolio.store import OrmRecordStore, SupabaseRecordStore, get_record_store


@pytest.mark.django_db
def test_settings_row_is_seeded():
    row = OrmRecordStore().select_one("settings")
    assert row["contact_link"] == "https://t.me/yourusername"
    assert SiteSettings.objects.count() == 1


@pytest.mark.django_db
def test_select_all_orders_by_display_order():
    Project.objects.create(title="b", display_order=5)
    Project.objects.create(title="a", display_order=1)
    rows = OrmRecordStore().select_all("projects", order_by="display_order")
    assert [r["title"] for r in rows] == ["a", "b"]


@pytest.mark.django_db
def test_insert_update_delete_roundtrip():
    store = OrmRecordStore()
    row = store.insert("projects", {"title": "t", "description": "d", "tech": ["Go"], "display_order": 0})
    assert row["id"]
    assert row["link"] == "#"

    assert store.update("projects", row["id"], {"title": "t2"}) is True
    assert Project.objects.get(pk=row["id"]).title == "t2"

    assert store.delete("projects", row["id"]) is True
    assert store.delete("projects", row["id"]) is False
    assert store.update("projects", row["id"], {"title": "t3"}) is False


@pytest.mark.django_db
def test_missing_settings_row_is_a_store_error():
    SiteSettings.objects.all().delete()
    with pytest.raises(StoreError):
        OrmRecordStore().select_one("settings")


@pytest.mark.django_db
def test_delete_with_malformed_id_is_not_found():
    assert OrmRecordStore().delete("projects", "not-a-number") is False


def test_unknown_table():
    with pytest.raises(StoreError):
        OrmRecordStore().select_all("users")


@pytest.mark.django_db
def test_catalog_over_orm_with_filesystem_uploads(settings):
    from django.core.files.uploadedfile import SimpleUploadedFile

    catalog = Catalog(OrmRecordStore(), DjangoObjectStorage()).load()
    created = catalog.create(ProjectDraft(
        title="Site", description="Portfolio", tech="Django, HTMX",
        upload=SimpleUploadedFile("demo.webm", b"video"),
    ))
    assert created.image_url.startswith("/media/project-images/")
    assert created.media.kind.value == "video"
    saved = settings.MEDIA_ROOT / "project-images" / created.image_url.rsplit("/", 1)[1]
    assert saved.read_bytes() == b"video"
    assert Project.objects.get(pk=created.id).tech == ["Django", "HTMX"]


def test_backend_selection(settings):
    settings.PORTFOLIO_BACKEND = "supabase"
    settings.SUPABASE_URL = "https://abc.supabase.co"
    settings.SUPABASE_KEY = "anon"
    assert isinstance(get_record_store(), SupabaseRecordStore)
    assert not isinstance(get_object_storage(), DjangoObjectStorage)

    settings.SUPABASE_URL = ""
    with pytest.raises(StoreError):
        get_record_store()

    settings.PORTFOLIO_BACKEND = "orm"
    assert isinstance(get_record_store(), OrmRecordStore)
    assert isinstance(get_object_storage(), DjangoObjectStorage)


class _UnreadableUpload(TemporaryUploadedFile):
    def read(self, *args, **kwargs):
        raise AssertionError("upload was read into memory")


@pytest.mark.django_db
def test_large_upload_is_moved_not_read(settings):
    upload = _UnreadableUpload("talk.mp4", "video/mp4", 5, None)
    upload.file.write(b"video")
    upload.file.flush()

    catalog = Catalog(OrmRecordStore(), DjangoObjectStorage()).load()
    created = catalog.create(ProjectDraft(title="Talk", description="d", upload=upload))

    saved = settings.MEDIA_ROOT / "project-images" / created.image_url.rsplit("/", 1)[1]
    assert saved.read_bytes() == b"video"
