"""
Django admin configuration for orders app.
"""
from django.contrib import admin

from orders.infrastructure.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for Order model. Orders are written by checkout only."""

    list_display = [
        "order_id",
        "tier",
        "include_addons",
        "customer_email",
        "total_amount",
        "currency",
        "status",
        "license_key",
        "created_at",
        "completed_at",
    ]
    list_filter = ["status", "tier", "include_addons", "created_at"]
    search_fields = ["order_id", "customer_email", "customer_name", "license_key"]
    readonly_fields = [field.name for field in Order._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
