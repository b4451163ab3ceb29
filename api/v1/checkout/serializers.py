"""
Serializers for Checkout API endpoints.
"""

from rest_framework import serializers


class PricesSerializer(serializers.Serializer):
    """Serializer for PricesDTO."""

    tiers = serializers.DictField(child=serializers.DecimalField(max_digits=10, decimal_places=2))
    addon = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()


class StartCheckoutRequestSerializer(serializers.Serializer):
    """Serializer for create order request."""

    tier = serializers.CharField(required=False, allow_blank=True, default="")
    customer_email = serializers.EmailField(required=False, allow_blank=True, default="")
    customer_name = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255, default=None
    )
    include_addons = serializers.BooleanField(required=False, default=False)


class CheckoutSerializer(serializers.Serializer):
    """Serializer for CheckoutDTO."""

    order_id = serializers.CharField()
    status = serializers.CharField()
    tier = serializers.CharField()
    include_addons = serializers.BooleanField()
    customer_email = serializers.EmailField()
    customer_name = serializers.CharField(allow_null=True)
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    approval_url = serializers.URLField(allow_null=True)
    test_mode = serializers.BooleanField()


class CaptureOrderRequestSerializer(serializers.Serializer):
    """Serializer for capture order request."""

    order_id = serializers.CharField(required=False, allow_blank=True, default="")


class IssuanceResultSerializer(serializers.Serializer):
    """Serializer for IssuanceResultDTO."""

    success = serializers.SerializerMethodField()
    order_id = serializers.CharField()
    license_key = serializers.CharField()
    tier = serializers.CharField()
    customer_email = serializers.EmailField()
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    expires_at = serializers.DateTimeField(allow_null=True)
    payment_transaction_id = serializers.CharField(allow_null=True)
    email_sent = serializers.BooleanField()
    test_mode = serializers.BooleanField()

    def get_success(self, _obj) -> bool:
        return True
