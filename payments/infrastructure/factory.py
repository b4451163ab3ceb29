"""
Payment gateway construction.

The gateway is built once per process from settings and shared by
the checkout views. No credentials means offline mode.
"""
import logging
from decimal import Decimal
from functools import lru_cache
from typing import Optional

from django.conf import settings

from payments.infrastructure.paypal_gateway import PayPalPaymentGateway
from payments.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


def build_payment_gateway() -> Optional[PaymentGateway]:
    """
    Build the configured gateway.

    Returns:
        PayPalPaymentGateway, or None when PayPal credentials are missing
    """
    if not settings.PAYPAL_CLIENT_ID or not settings.PAYPAL_CLIENT_SECRET:
        logger.info("PayPal not configured, checkout runs in offline mode")
        return None

    logger.info("PayPal initialized", extra={"mode": settings.PAYPAL_MODE})
    return PayPalPaymentGateway(
        client_id=settings.PAYPAL_CLIENT_ID,
        client_secret=settings.PAYPAL_CLIENT_SECRET,
        mode=settings.PAYPAL_MODE,
        timeout=settings.PAYMENT_GATEWAY_TIMEOUT,
        product_name=settings.PRODUCT_NAME,
        addon_price=Decimal(str(settings.ADDON_PRICE)),
        return_url=settings.PAYPAL_RETURN_URL,
        cancel_url=settings.PAYPAL_CANCEL_URL,
    )


@lru_cache(maxsize=1)
def get_payment_gateway() -> Optional[PaymentGateway]:
    """Process-wide gateway instance."""
    return build_payment_gateway()
