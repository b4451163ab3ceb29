"""
Administrator token authentication middleware.

This middleware guards the administrative license and order APIs
with a bearer credential obtained from /api/v1/auth/login.
"""

import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.infrastructure.admin_auth import AdminAuthenticator
from core.infrastructure.jwt_credentials import JWTCredentialIssuer

logger = logging.getLogger(__name__)


class AdminTokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for administrator authentication.

    This middleware:
    1. Leaves client-facing endpoints (validate, verify, checkout, login) open
    2. Requires an admin bearer token for license management and orders
    3. Returns 401 Unauthorized if authentication fails
    """

    public_license_paths = (
        "/api/v1/license/validate",
        "/api/v1/license/verify",
    )

    def __init__(self, get_response=None):
        super().__init__(get_response)
        self.authenticator = AdminAuthenticator(JWTCredentialIssuer())

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not self._requires_admin(request.path):
            return None

        token = self._get_bearer_token(request)
        if not token:
            return JsonResponse(
                {"error": {"code": "INVALID_TOKEN", "message": "No token provided"}},
                status=401,
            )

        if not self.authenticator.is_authorized(token):
            logger.warning("Rejected admin token", extra={"path": request.path})
            return JsonResponse(
                {"error": {"code": "INVALID_TOKEN", "message": "Invalid or expired token"}},
                status=401,
            )

        request.is_admin = True  # type: ignore
        return None

    def _requires_admin(self, path: str) -> bool:
        """
        Check if this path is an administrative endpoint.

        Args:
            path: Request path

        Returns:
            True if an admin token is required
        """
        if path.startswith("/api/v1/orders"):
            return True
        if path.startswith("/api/v1/license/"):
            return not any(path.startswith(public) for public in self.public_license_paths)
        return False

    def _get_bearer_token(self, request: HttpRequest) -> Optional[str]:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        return header[len("Bearer "):].strip() or None
