"""
Serializers for Orders API endpoints.
"""

from rest_framework import serializers


class OrderSerializer(serializers.Serializer):
    """Serializer for OrderDTO."""

    order_id = serializers.CharField()
    tier = serializers.CharField()
    include_addons = serializers.BooleanField()
    customer_email = serializers.EmailField()
    customer_name = serializers.CharField(allow_null=True)
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    status = serializers.CharField()
    license_key = serializers.CharField(allow_null=True)
    payment_transaction_id = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    completed_at = serializers.DateTimeField(allow_null=True)
