"""
Order ORM model.
"""
from django.db import models
from django.utils import timezone

from licenses.infrastructure.models import TIER_CHOICES


class Order(models.Model):
    """A checkout, pending until payment is captured and a license issued."""

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
    ]

    order_id = models.CharField(max_length=64, unique=True)
    tier = models.CharField(max_length=32, choices=TIER_CHOICES)
    include_addons = models.BooleanField(default=False)
    customer_email = models.EmailField(db_index=True)
    customer_name = models.CharField(max_length=255, null=True, blank=True)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default="EUR")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="pending")
    license_key = models.CharField(max_length=19, null=True, blank=True)
    payment_transaction_id = models.CharField(max_length=128, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
        ]

    def __str__(self):
        return f"{self.order_id} ({self.status})"
