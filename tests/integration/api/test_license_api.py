"""
Integration tests for License API endpoints.
"""
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from licenses.infrastructure.models import License


@pytest.mark.django_db
@pytest.mark.integration
class TestValidateLicenseAPI:
    """Integration tests for device validation."""

    def test_validate_binds_and_returns_token(self, api_client, db_license):
        response = api_client.post(
            reverse("license:validate-license"),
            {"license_key": db_license.key, "hardware_id": "HW-1"},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["token"]
        assert data["tier"] == "pro"
        assert data["expires_in"] == 1800
        assert License.objects.get(license_key=db_license.key).hardware_id == "HW-1"

    def test_validate_other_device(self, api_client, db_license):
        url = reverse("license:validate-license")
        api_client.post(url, {"license_key": db_license.key, "hardware_id": "HW-1"}, format="json")

        response = api_client.post(
            url, {"license_key": db_license.key, "hardware_id": "HW-2"}, format="json"
        )

        assert response.status_code == 403
        assert response.json() == {
            "valid": False,
            "error": {
                "code": "HARDWARE_MISMATCH",
                "message": "License is bound to a different device",
            },
        }

    @pytest.mark.parametrize(
        "payload,status_code,code",
        [
            ({}, 400, "MISSING_PARAMETER"),
            ({"license_key": "bad", "hardware_id": "HW-1"}, 400, "INVALID_LICENSE_FORMAT"),
            ({"license_key": "ZZZZ-ZZZZ-ZZZZ-ZZZZ", "hardware_id": "HW-1"}, 404, "LICENSE_NOT_FOUND"),
        ],
    )
    def test_validate_errors(self, api_client, db, payload, status_code, code):
        response = api_client.post(reverse("license:validate-license"), payload, format="json")

        assert response.status_code == status_code
        assert response.json()["valid"] is False
        assert response.json()["error"]["code"] == code

    def test_validate_expired(self, api_client, db_license):
        License.objects.filter(license_key=db_license.key).update(
            expires_at=timezone.now() - timedelta(seconds=1)
        )

        response = api_client.post(
            reverse("license:validate-license"),
            {"license_key": db_license.key, "hardware_id": "HW-1"},
            format="json",
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "LICENSE_EXPIRED"

    def test_verify_credential(self, api_client, db_license):
        token = api_client.post(
            reverse("license:validate-license"),
            {"license_key": db_license.key, "hardware_id": "HW-1"},
            format="json",
        ).json()["token"]

        response = api_client.post(reverse("license:verify-credential"), {"token": token}, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["license_key"] == db_license.key
        assert data["hardware_id"] == "HW-1"

    def test_verify_bearer_header(self, api_client, db_license):
        token = api_client.post(
            reverse("license:validate-license"),
            {"license_key": db_license.key, "hardware_id": "HW-1"},
            format="json",
        ).json()["token"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = api_client.post(reverse("license:verify-credential"), {}, format="json")

        assert response.status_code == 200

    def test_verify_invalid_token(self, api_client, db):
        response = api_client.post(
            reverse("license:verify-credential"), {"token": "garbage"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["valid"] is False
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    def test_admin_token_is_not_a_license_credential(self, api_client, db, admin_token):
        response = api_client.post(
            reverse("license:verify-credential"), {"token": admin_token}, format="json"
        )

        assert response.status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAdminAPI:
    """Integration tests for administrative license endpoints."""

    def test_admin_endpoints_require_token(self, api_client):
        response = api_client.post(reverse("license:create-license"), {"tier": "pro"}, format="json")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"
        assert License.objects.count() == 0

    def test_license_credential_rejected_for_admin(self, api_client, db_license):
        token = api_client.post(
            reverse("license:validate-license"),
            {"license_key": db_license.key, "hardware_id": "HW-1"},
            format="json",
        ).json()["token"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = api_client.get(reverse("license:list-licenses"))

        assert response.status_code == 401

    def test_create_license(self, admin_client):
        response = admin_client.post(
            reverse("license:create-license"),
            {"tier": "enterprise", "owner_email": "corp@example.com", "price": "800.00"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["tier"] == "enterprise"
        assert data["price"] == "800.00"
        assert data["is_active"] is True
        assert License.objects.filter(license_key=data["license_key"]).exists()

    def test_create_custom_key_conflict(self, admin_client, db_license):
        response = admin_client.post(
            reverse("license:create-license"),
            {"tier": "pro", "license_key": db_license.key},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_LICENSE_KEY"

    def test_create_invalid_tier(self, admin_client):
        response = admin_client.post(reverse("license:create-license"), {"tier": "gold"}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TIER"

    def test_list_licenses(self, admin_client, db_license):
        response = admin_client.get(reverse("license:list-licenses"), {"email": "owner@example.com"})

        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert response.json()["licenses"][0]["license_key"] == db_license.key

    def test_deactivate_activate_and_reset(self, admin_client, api_client, db_license):
        validate_url = reverse("license:validate-license")
        admin_client.post(validate_url, {"license_key": db_license.key, "hardware_id": "HW-1"}, format="json")

        response = admin_client.post(
            reverse("license:deactivate-license"), {"license_key": db_license.key}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert response.json()["hardware_id"] == "HW-1"

        response = admin_client.post(
            reverse("license:activate-license"), {"license_key": db_license.key}, format="json"
        )
        assert response.json()["is_active"] is True

        response = admin_client.post(
            reverse("license:reset-hardware"), {"license_key": db_license.key}, format="json"
        )
        assert response.json()["hardware_id"] is None

    def test_renew_license(self, admin_client, db_license):
        response = admin_client.post(
            reverse("license:renew-license"),
            {"license_key": db_license.key, "expires_at": None},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["expires_at"] is None

    def test_action_on_unknown_license(self, admin_client):
        response = admin_client.post(
            reverse("license:activate-license"), {"license_key": "ZZZZ-ZZZZ-ZZZZ-ZZZZ"}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_delete_license(self, admin_client, db_license):
        url = reverse("license:delete-license", kwargs={"license_key": db_license.key})

        response = admin_client.delete(url)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "License deleted"}
        assert admin_client.delete(url).status_code == 404


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for administrator login."""

    def test_login_and_use_token(self, api_client, settings):
        from django.contrib.auth.hashers import make_password

        settings.ADMIN_USERNAME = "admin"
        settings.ADMIN_PASSWORD_HASH = make_password("s3cret")

        response = api_client.post(
            reverse("auth:login"), {"username": "admin", "password": "s3cret"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.json()['token']}")
        assert api_client.get(reverse("license:list-licenses")).status_code == 200

    def test_login_wrong_password(self, api_client, settings):
        from django.contrib.auth.hashers import make_password

        settings.ADMIN_PASSWORD_HASH = make_password("s3cret")

        response = api_client.post(
            reverse("auth:login"), {"username": "admin", "password": "nope"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"
