"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "tier",
        "owner_email",
        "hardware_id",
        "status_display",
        "expires_at",
        "last_validated_at",
        "created_at",
    ]
    list_filter = ["tier", "is_active", "expires_at", "created_at"]
    search_fields = ["license_key", "owner_email", "owner_name", "hardware_id"]
    readonly_fields = ["license_key", "created_at", "last_validated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("license_key", "tier", "price", "is_active"),
            },
        ),
        (
            "Owner",
            {
                "fields": ("owner_email", "owner_name"),
            },
        ),
        (
            "Device",
            {
                "fields": ("hardware_id", "last_validated_at"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at", "created_at"),
            },
        ),
    )

    def status_display(self, obj):
        """Display derived status with color coding."""
        if not obj.is_active:
            color, label = "red", "INACTIVE"
        elif obj.expires_at is not None and obj.expires_at <= timezone.now():
            color, label = "gray", "EXPIRED"
        elif obj.hardware_id:
            color, label = "green", "BOUND"
        else:
            color, label = "orange", "UNBOUND"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            label,
        )

    status_display.short_description = "Status"
