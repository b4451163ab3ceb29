"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateLicenseKeyError
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    Every mutator is a single UPDATE/DELETE filtered by key, so
    the returned row count tells the caller whether it applied.
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.license_key,
            tier=model.tier,
            price=model.price,
            hardware_id=model.hardware_id,
            owner_email=model.owner_email,
            owner_name=model.owner_name,
            is_active=model.is_active,
            created_at=model.created_at,
            last_validated_at=model.last_validated_at,
            expires_at=model.expires_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            license_key=license.key,
            tier=license.tier,
            price=license.price,
            hardware_id=license.hardware_id,
            owner_email=license.owner_email,
            owner_name=license.owner_name,
            is_active=license.is_active,
            created_at=license.created_at,
            last_validated_at=license.last_validated_at,
            expires_at=license.expires_at,
        )

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[License]:
        try:
            model = LicenseModel.objects.get(license_key=key)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def create(self, license: License) -> License:
        """
        Insert a license, relying on the unique index for collisions.

        The insert runs in its own savepoint so a rejected key does
        not break an enclosing transaction.
        """
        model = self._to_model(license)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateLicenseKeyError(
                f"License key {license.key} already exists"
            ) from e
        return self._to_domain(model)

    @sync_to_async
    def bind_hardware_if_unbound(self, key: str, hardware_id: str, now: datetime) -> int:
        return LicenseModel.objects.filter(
            license_key=key, hardware_id__isnull=True
        ).update(hardware_id=hardware_id, last_validated_at=now)

    @sync_to_async
    def touch_last_validated(self, key: str, now: datetime) -> int:
        return LicenseModel.objects.filter(license_key=key).update(last_validated_at=now)

    @sync_to_async
    def set_active(self, key: str, is_active: bool) -> int:
        return LicenseModel.objects.filter(license_key=key).update(is_active=is_active)

    @sync_to_async
    def reset_hardware(self, key: str) -> int:
        return LicenseModel.objects.filter(license_key=key).update(hardware_id=None)

    @sync_to_async
    def set_expiration(self, key: str, expires_at: Optional[datetime]) -> int:
        return LicenseModel.objects.filter(license_key=key).update(expires_at=expires_at)

    @sync_to_async
    def delete(self, key: str) -> int:
        deleted, _ = LicenseModel.objects.filter(license_key=key).delete()
        return deleted

    @sync_to_async
    def list_all(self) -> List[License]:
        """
        List every license, newest first.

        Returns:
            List of License entities
        """
        models = LicenseModel.objects.all().order_by("-created_at", "-id")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_by_owner_email(self, email: str) -> List[License]:
        models = LicenseModel.objects.filter(owner_email__iexact=email).order_by(
            "-created_at", "-id"
        )
        return [self._to_domain(model) for model in models]
