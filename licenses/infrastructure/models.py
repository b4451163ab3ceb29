"""
License ORM model.
"""
from django.db import models
from django.utils import timezone

TIER_CHOICES = [
    ("trader", "Trader"),
    ("pro", "Pro"),
    ("enterprise", "Enterprise"),
]


class License(models.Model):
    """
    A license key, optionally bound to one device.

    ``hardware_id`` is written by the conditional bind in the
    repository, never through ``save()``.
    """

    license_key = models.CharField(max_length=19, unique=True)
    tier = models.CharField(max_length=32, choices=TIER_CHOICES)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    hardware_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    owner_email = models.EmailField(null=True, blank=True, db_index=True)
    owner_name = models.CharField(max_length=255, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    last_validated_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["is_active", "expires_at"], name="licenses_active_expiry_idx"),
        ]

    def __str__(self):
        return self.license_key
