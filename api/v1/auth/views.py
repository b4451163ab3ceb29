"""
Admin authentication API views.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.auth.serializers import LoginRequestSerializer, LoginResponseSerializer
from core.infrastructure.admin_auth import AdminAuthenticator
from core.infrastructure.jwt_credentials import JWTCredentialIssuer


class LoginView(APIView):
    """View for administrator login."""

    @extend_schema(
        operation_id="admin_login",
        summary="Admin Login",
        description="Exchange administrator credentials for a bearer token.",
        tags=["Auth API"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: {"description": "Username and password required"},
            401: {"description": "Invalid credentials"},
        },
    )
    def post(self, request: Request) -> Response:
        """Log the administrator in."""
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        authenticator = AdminAuthenticator(JWTCredentialIssuer())
        session = authenticator.login(
            serializer.validated_data["username"],
            serializer.validated_data["password"],
        )
        return Response(
            {"success": True, **LoginResponseSerializer(session).data},
            status=status.HTTP_200_OK,
        )
