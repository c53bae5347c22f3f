# conftest.py (repo root)
import pytest


@pytest.fixture(autouse=True)
def _test_sane_http(settings, tmp_path):
    # Kill HTTPS + HSTS so test client doesn't get 301 to https://
    settings.SECURE_SSL_REDIRECT = False
    settings.SECURE_HSTS_SECONDS = 0
    settings.SECURE_HSTS_INCLUDE_SUBDOMAINS = False
    settings.SECURE_HSTS_PRELOAD = False
    settings.SECURE_PROXY_SSL_HEADER = None

    # No collectstatic manifest in tests; uploads go to a throwaway dir.
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.PORTFOLIO_BACKEND = "orm"
