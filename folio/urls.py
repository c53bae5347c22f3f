# folio/urls.py

from django.conf import settings
from django.contrib import admin
from django.urls import path, include, re_path
from django.views.static import serve as media_serve

from portfolio import views as portfolio

# ---- URL patterns -----------------------------------------------------------
urlpatterns = [
    path("admin/", admin.site.urls),

    # auth (login/logout/password*)
    path("accounts/", include("django.contrib.auth.urls")),

    path("healthz", portfolio.healthz, name="healthz"),

    # public page + dashboard
    path("", include("portfolio.urls", namespace="portfolio")),
]

if settings.DEBUG:
    # uploads from the "orm" backend land in MEDIA_ROOT
    urlpatterns += [
        re_path(r"^media/(?P<path>.*)$", media_serve, {"document_root": settings.MEDIA_ROOT}),
    ]
