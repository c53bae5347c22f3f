from django.conf import settings
from django.db import models

from .media import classify

DEFAULT_CONTACT_LINK = "https://t.me/yourusername"


class Project(models.Model):
    title = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    tech = models.JSONField(default=list, blank=True, help_text="List of technology tags")
    link = models.CharField(max_length=500, blank=True, default="#")
    display_order = models.IntegerField(default=0, db_index=True)
    # any media reference: image/video file URL or a YouTube/Vimeo link
    image_url = models.CharField(max_length=1000, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_order", "created_at"]

    def __str__(self):
        return self.title

    @property
    def media(self):
        return classify(self.image_url)


class SiteSettings(models.Model):
    """Singleton row: profile picture and the target of every contact button."""
    profile_image_url = models.CharField(max_length=1000, blank=True, null=True)
    contact_link = models.CharField(max_length=500, default=DEFAULT_CONTACT_LINK)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Site settings"
        verbose_name_plural = "Site settings"

    def __str__(self):
        return f"Site settings ({self.contact_link})"


class UserRole(models.Model):
    ROLE_ADMIN = "admin"
    ROLE_USER = "user"

    ROLES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_USER, "User"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="roles")
    role = models.CharField(max_length=16, choices=ROLES, default=ROLE_USER)

    class Meta:
        constraints = [models.UniqueConstraint(fields=["user", "role"], name="unique_user_role")]

    def __str__(self):
        return f"{self.user} · {self.role}"
