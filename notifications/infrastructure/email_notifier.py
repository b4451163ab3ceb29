"""
Django e-mail implementation of the Notifier port.
"""
import logging
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.core.mail.message import make_msgid
from django.template.loader import render_to_string
from django.utils import timezone

from core.metrics import notifications_total
from notifications.ports.notifier import NotificationResult, Notifier

logger = logging.getLogger(__name__)

TIER_NAMES = {"trader": "Trader", "pro": "Pro Trader", "enterprise": "Enterprise"}


class EmailNotifier(Notifier):
    """
    Sends the license e-mail through Django's mail backend.

    Nothing is sent when SMTP credentials are missing; the result
    then carries ``reason="not_configured"``.
    """

    template_name = "notifications/license_issued"

    def is_configured(self) -> bool:
        return bool(settings.EMAIL_HOST_USER and settings.EMAIL_HOST_PASSWORD)

    async def send(
        self,
        customer_email: str,
        customer_name: Optional[str],
        license_key: str,
        tier: str,
        expires_at: Optional[datetime],
        order_id: str,
    ) -> NotificationResult:
        if not self.is_configured():
            logger.info("Email not configured, skipping license email", extra={"order_id": order_id})
            notifications_total.labels(outcome="not_configured").inc()
            return NotificationResult(delivered=False, reason="not_configured")

        try:
            reference = await self._deliver(
                customer_email, customer_name, license_key, tier, expires_at, order_id
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            # Delivery problems must not undo an issued license
            logger.error(
                "Failed to send license email",
                extra={"order_id": order_id, "error": str(e)},
                exc_info=True,
            )
            notifications_total.labels(outcome="failed").inc()
            return NotificationResult(delivered=False, reason=str(e) or type(e).__name__)

        logger.info("License email sent", extra={"order_id": order_id, "message_id": reference})
        notifications_total.labels(outcome="delivered").inc()
        return NotificationResult(delivered=True, reference=reference)

    @sync_to_async(thread_sensitive=False)
    def _deliver(self, customer_email, customer_name, license_key, tier, expires_at, order_id) -> str:
        tier_name = TIER_NAMES.get(tier, tier)
        context = {
            "product_name": settings.PRODUCT_NAME,
            "customer_name": customer_name or "there",
            "license_key": license_key,
            "tier_name": tier_name,
            "order_id": order_id,
            "expires_at": expires_at,
            "support_email": settings.SUPPORT_EMAIL,
            "year": timezone.now().year,
        }
        message_id = make_msgid()
        message = EmailMultiAlternatives(
            subject=f"Your {settings.PRODUCT_NAME} {tier_name} License - Order {order_id}",
            body=render_to_string(f"{self.template_name}.txt", context),
            from_email=f'"{settings.PRODUCT_NAME}" <{settings.DEFAULT_FROM_EMAIL}>',
            to=[customer_email],
            headers={"Message-ID": message_id},
            connection=get_connection(timeout=settings.EMAIL_TIMEOUT),
        )
        message.attach_alternative(render_to_string(f"{self.template_name}.html", context), "text/html")
        message.send(fail_silently=False)
        return message_id
