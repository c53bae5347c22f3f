# portfolio/views.py
from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.templatetags.static import static
from django.views.decorators.http import require_GET, require_POST

from .access import admin_required
from .catalog import Catalog, ProjectDraft
from .errors import CatalogError, FetchError, StoreError
from .notify import notify

log = logging.getLogger("app")


def _display_catalog(request=None) -> Catalog | None:
    """
    Catalog for the read-only pages. Whatever loaded is shown; a backend that
    can't be built gives ``None``. With ``request``, failures are also toasted.
    """
    try:
        catalog = Catalog.from_settings()
    except StoreError as exc:
        log.error("Portfolio backend unavailable: %s", exc)
        if request is not None:
            notify(request, "Error", str(exc), destructive=True)
        return None
    try:
        catalog.load()
    except FetchError as exc:
        log.warning("Catalog load failed: %s", exc)
        if request is not None:
            notify(request, "Error", str(exc), destructive=True)
    return catalog


def _draft(request) -> ProjectDraft:
    post = request.POST
    return ProjectDraft(
        title=post.get("title", ""),
        description=post.get("description", ""),
        tech=post.get("tech", ""),
        link=post.get("link", ""),
        # field missing from the form != field submitted blank
        media_url=post.get("media_url") if "media_url" in post else None,
        upload=request.FILES.get("image"),
    )


def _perform(request, success: str, action, *, check=None):
    """
    Run ``action(catalog)`` against a fully loaded catalog and turn the outcome
    into one toast. Nothing is written unless both reads succeeded.
    """
    try:
        if check is not None:
            check()
        catalog = Catalog.from_settings()
        catalog.load()
        action(catalog)
    except (CatalogError, StoreError) as exc:
        log.warning("Dashboard action failed (%s): %s", success, exc)
        notify(request, "Error", str(exc), destructive=True)
    else:
        notify(request, "Success", success)
    return redirect("portfolio:dashboard")


# -----------------------------------------------------------------------------
# Public page
# -----------------------------------------------------------------------------
@require_GET
def home(request):
    catalog = _display_catalog()
    return render(request, "portfolio/home.html", {
        "projects": catalog.projects if catalog else [],
        "contact_link": catalog.contact_link if catalog else settings.PORTFOLIO_DEFAULT_CONTACT_LINK,
        "profile_image_url": (catalog and catalog.profile_image_url)
        or static(settings.PORTFOLIO_DEFAULT_PROFILE_IMAGE),
    })


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------
@require_GET
@admin_required
def dashboard(request):
    catalog = _display_catalog(request)
    editing = None
    if catalog is not None and request.GET.get("edit"):
        editing = catalog.get(request.GET["edit"])
    return render(request, "portfolio/dashboard.html", {
        "projects": catalog.projects if catalog else [],
        "site_settings": catalog.settings if catalog else None,
        "contact_link": catalog.contact_link if catalog else settings.PORTFOLIO_DEFAULT_CONTACT_LINK,
        "editing": editing,
    })


@require_POST
@admin_required
def project_add(request):
    draft = _draft(request)
    return _perform(request, "Project added", lambda c: c.create(draft), check=draft.validate)


@require_POST
@admin_required
def project_edit(request, project_id: str):
    draft = _draft(request)
    return _perform(
        request, "Project updated",
        lambda c: c.update(project_id, draft),
        check=lambda: draft.validate(creating=False),
    )


@require_POST
@admin_required
def project_delete(request, project_id: str):
    return _perform(request, "Project deleted", lambda c: c.delete(project_id))


@require_POST
@admin_required
def contact_link_update(request):
    link = (request.POST.get("contact_link") or "").strip()
    return _perform(request, "Contact link updated", lambda c: c.update_settings(contact_link=link))


@require_POST
@admin_required
def profile_image_upload(request):
    upload = request.FILES.get("image")
    return _perform(request, "Profile image updated", lambda c: c.upload_profile_image(upload))


# -----------------------------------------------------------------------------
# Healthcheck
# -----------------------------------------------------------------------------
def healthz(_request):
    return HttpResponse("ok", content_type="text/plain")
