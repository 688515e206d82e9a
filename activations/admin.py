"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import Activation


@admin.register(Activation)
class ActivationAdmin(admin.ModelAdmin):
    """Admin interface for Activation model."""

    list_display = [
        "license",
        "domain",
        "theme_id",
        "is_active_display",
        "activated_at",
    ]
    list_filter = ["is_active", "activated_at"]
    search_fields = ["license__license_key", "domain", "theme_id"]
    readonly_fields = [
        "id",
        "license",
        "domain",
        "theme_id",
        "is_active",
        "activated_at",
    ]
    fieldsets = (
        (
            "Binding",
            {
                "fields": ("id", "license", "domain", "is_active"),
            },
        ),
        (
            "Theme",
            {
                "fields": ("theme_id",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("activated_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def is_active_display(self, obj):
        """Display active status with color."""
        if obj.is_active:
            return format_html('<span style="color: {}; font-weight: bold;">{}</span>', "green", "✓ Active")
        return format_html('<span style="color: {}; font-weight: bold;">{}</span>', "red", "✗ Inactive")

    is_active_display.short_description = "Status"

    def has_add_permission(self, request):
        """Activations are created through the activation endpoint."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Activations are kept as history."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")
