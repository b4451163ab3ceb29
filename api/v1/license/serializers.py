"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, default="")
    hardware_id = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=255
    )


class LicenseValidationSerializer(serializers.Serializer):
    """Serializer for LicenseValidationDTO."""

    valid = serializers.SerializerMethodField()
    token = serializers.CharField()
    tier = serializers.CharField()
    expires_in = serializers.IntegerField()
    license_key = serializers.CharField()
    hardware_id = serializers.CharField()
    expires_at = serializers.DateTimeField(allow_null=True)

    def get_valid(self, _obj) -> bool:
        return True


class VerifyCredentialRequestSerializer(serializers.Serializer):
    """Serializer for verify credential request."""

    token = serializers.CharField(required=False, allow_blank=True, default="")


class CredentialClaimsSerializer(serializers.Serializer):
    """Serializer for CredentialClaimsDTO."""

    license_key = serializers.CharField()
    hardware_id = serializers.CharField()
    tier = serializers.CharField()
    owner_email = serializers.EmailField(allow_null=True)
    expires_at = serializers.DateTimeField()


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    tier = serializers.CharField(required=False, allow_blank=True, default="")
    owner_email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    owner_name = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=255
    )
    expires_at = serializers.DateTimeField(required=False, allow_null=True)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, min_value=0, default=0
    )
    license_key = serializers.CharField(required=False, allow_null=True, default=None)


class LicenseKeyRequestSerializer(serializers.Serializer):
    """Serializer for requests that target one license."""

    license_key = serializers.CharField(max_length=19)


class RenewLicenseRequestSerializer(serializers.Serializer):
    """Serializer for renew license request; null removes the expiry."""

    license_key = serializers.CharField(max_length=19)
    expires_at = serializers.DateTimeField(allow_null=True)


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    license_key = serializers.CharField()
    tier = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    hardware_id = serializers.CharField(allow_null=True)
    owner_email = serializers.EmailField(allow_null=True)
    owner_name = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    last_validated_at = serializers.DateTimeField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)
