from django.contrib import admin
from django.utils.html import format_html

from .models import Project, SiteSettings, UserRole


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("title", "display_order", "media_kind", "link", "created_at")
    list_editable = ("display_order",)
    search_fields = ("title", "description")
    ordering = ("display_order", "created_at")

    @admin.display(description="Media")
    def media_kind(self, obj):
        ref = obj.media
        if not ref:
            return "—"
        return format_html('<a href="{}" target="_blank">{}</a>', ref.embed, ref.kind.value)


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    list_display = ("contact_link", "thumb", "updated_at")
    readonly_fields = ("updated_at",)

    @admin.display(description="Profile image")
    def thumb(self, obj):
        if obj.profile_image_url:
            return format_html('<img src="{}" style="height:40px;border-radius:50%" />', obj.profile_image_url)
        return "—"

    def has_add_permission(self, request):
        # singleton row, seeded by the initial migration
        return not SiteSettings.objects.exists()


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ("user", "role")
    list_filter = ("role",)
    search_fields = ("user__username",)
    autocomplete_fields = ("user",)
