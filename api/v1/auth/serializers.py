"""
Serializers for admin authentication endpoints.
"""

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for admin login request."""

    username = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )


class LoginResponseSerializer(serializers.Serializer):
    """Serializer for AdminSession."""

    token = serializers.CharField()
    expires_in = serializers.IntegerField()
