"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "domain",
        "status_display",
        "activation_count",
        "activated_at",
        "created_at",
    ]
    list_filter = ["is_active", "created_at", "activated_at"]
    search_fields = ["license_key", "domain"]
    readonly_fields = [
        "license_key",
        "domain",
        "is_active",
        "created_at",
        "activated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("license_key", "domain", "is_active"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "activated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display binding status with color coding."""
        if obj.is_active:
            return format_html('<span style="color: {}; font-weight: bold;">{}</span>', "green", "ACTIVE")
        return format_html('<span style="color: {}; font-weight: bold;">{}</span>', "gray", "UNBOUND")

    status_display.short_description = "Status"

    def activation_count(self, obj):
        """Display number of domains this key has been activated on."""
        return obj.activations.count()

    activation_count.short_description = "Activations"

    def has_add_permission(self, request):
        """Licenses are issued through bulk generation."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("activations")
