"""
Core views for health checks and system status.
"""

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from payments.infrastructure.factory import get_payment_gateway


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "device-license-service"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        try:
            _ping_database()
        except DatabaseError as e:
            return JsonResponse(
                {"status": "unhealthy", "database": "disconnected", "error": str(e)},
                status=503,
            )
        return JsonResponse({"status": "healthy", "database": "connected"})


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {"database": self._check_database()}
        all_healthy = all(checks.values())

        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
                "payment_mode": "gateway" if get_payment_gateway() else "offline",
            },
            status=200 if all_healthy else 503,
        )

    def _check_database(self) -> bool:
        try:
            _ping_database()
        except DatabaseError:
            return False
        return True


def _ping_database():
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
