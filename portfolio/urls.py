from django.urls import path

from . import views

app_name = "portfolio"

urlpatterns = [
    path("", views.home, name="home"),
    path("dashboard/", views.dashboard, name="dashboard"),
    path("dashboard/projects/add", views.project_add, name="project_add"),
    path("dashboard/projects/<str:project_id>/edit", views.project_edit, name="project_edit"),
    path("dashboard/projects/<str:project_id>/delete", views.project_delete, name="project_delete"),
    path("dashboard/settings/contact", views.contact_link_update, name="contact_link_update"),
    path("dashboard/settings/profile-image", views.profile_image_upload, name="profile_image_upload"),
]
