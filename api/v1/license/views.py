"""
License API views.

Client devices call validate and verify; every other endpoint is
administrative and guarded by AdminTokenAuthenticationMiddleware.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.license.serializers import (
    CreateLicenseRequestSerializer,
    CredentialClaimsSerializer,
    LicenseKeyRequestSerializer,
    LicenseSerializer,
    LicenseValidationSerializer,
    RenewLicenseRequestSerializer,
    ValidateLicenseRequestSerializer,
    VerifyCredentialRequestSerializer,
)
from core.infrastructure.jwt_credentials import JWTCredentialIssuer
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.license_admin_commands import (
    ActivateLicenseCommand,
    DeactivateLicenseCommand,
    DeleteLicenseCommand,
    ResetHardwareCommand,
)
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.application.handlers.license_admin_handlers import (
    ActivateLicenseHandler,
    DeactivateLicenseHandler,
    DeleteLicenseHandler,
    ListLicensesHandler,
    RenewLicenseHandler,
    ResetHardwareHandler,
)
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.application.handlers.verify_credential_handler import VerifyCredentialHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.verify_credential import VerifyCredentialQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_credential_issuer = JWTCredentialIssuer()

tracer = get_tracer(__name__)


class ValidateLicenseView(APIView):
    """View for device license validation."""

    error_extra = {"valid": False}

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Validate a license key from a device. The first successful validation "
            "binds the license to the device's hardware id; later validations must "
            "come from the same device. Returns a short-lived credential."
        ),
        tags=["License API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: LicenseValidationSerializer,
            400: {"description": "Missing parameter or malformed key"},
            403: {"description": "Deactivated, expired or bound to another device"},
            404: {"description": "License not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            serializer = ValidateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = ValidateLicenseHandler(
                license_repository=_license_repo,
                credential_issuer=_credential_issuer,
            )
            try:
                result = await handler.handle(
                    ValidateLicenseCommand(
                        license_key=serializer.validated_data["license_key"],
                        hardware_id=serializer.validated_data["hardware_id"],
                    )
                )
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise

            span.set_attribute("license.tier", result.tier)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseValidationSerializer(result).data, status=status.HTTP_200_OK)


class VerifyCredentialView(APIView):
    """View for checking a credential issued by validation."""

    error_extra = {"valid": False}

    @extend_schema(
        operation_id="verify_credential",
        summary="Verify Credential",
        description="Check a license credential and return its claims.",
        tags=["License API"],
        request=VerifyCredentialRequestSerializer,
        responses={
            200: CredentialClaimsSerializer,
            401: {"description": "Invalid or expired token"},
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license credential."""
        serializer = VerifyCredentialRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        token = serializer.validated_data["token"] or _bearer_token(request)
        handler = VerifyCredentialHandler(credential_issuer=_credential_issuer)
        claims = async_to_sync(handler.handle)(VerifyCredentialQuery(token=token))

        return Response(
            {"valid": True, **CredentialClaimsSerializer(claims).data},
            status=status.HTTP_200_OK,
        )


class CreateLicenseView(APIView):
    """View for creating licenses (admin)."""

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Issue a new license. A key is generated unless one is supplied. "
            "Requires an admin bearer token."
        ),
        tags=["License Admin API"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Invalid tier or key format"},
            401: {"description": "Unauthorized"},
            409: {"description": "License key already exists"},
            503: {"description": "Could not generate a unique key"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_license") as span:
            span.set_attribute("operation", "create_license")

            serializer = CreateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = CreateLicenseHandler(license_repository=_license_repo)
            license = await handler.handle(
                CreateLicenseCommand(
                    tier=data["tier"],
                    owner_email=data.get("owner_email") or None,
                    owner_name=data.get("owner_name") or None,
                    expires_at=data.get("expires_at"),
                    price=data["price"],
                    license_key=data.get("license_key"),
                )
            )

            span.set_attribute("license.tier", license.tier)
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseSerializer(LicenseDTO.from_entity(license)).data,
                status=status.HTTP_201_CREATED,
            )


class ListLicensesView(APIView):
    """View for listing licenses (admin)."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List all licenses newest first, optionally filtered by owner email.",
        tags=["License Admin API"],
        parameters=[
            OpenApiParameter(
                name="email",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Owner email",
            ),
        ],
        responses={200: LicenseSerializer(many=True), 401: {"description": "Unauthorized"}},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        handler = ListLicensesHandler(license_repository=_license_repo)
        licenses = async_to_sync(handler.handle)(
            ListLicensesQuery(owner_email=request.query_params.get("email") or None)
        )
        data = LicenseSerializer([LicenseDTO.from_entity(lic) for lic in licenses], many=True).data
        return Response({"licenses": data, "count": len(data)}, status=status.HTTP_200_OK)


class _LicenseActionView(APIView):
    """Base for admin actions that take a license key and return the license."""

    handler_class = None
    command_class = None
    operation = None

    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_action)(request)

    async def _handle_action(self, request: Request) -> Response:
        with tracer.start_as_current_span(self.operation) as span:
            span.set_attribute("operation", self.operation)

            serializer = LicenseKeyRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            license_key = serializer.validated_data["license_key"]

            handler = self.handler_class(license_repository=_license_repo)
            license = await handler.handle(self.command_class(license_key=license_key))

            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseSerializer(LicenseDTO.from_entity(license)).data,
                status=status.HTTP_200_OK,
            )


_action_responses = {
    200: LicenseSerializer,
    401: {"description": "Unauthorized"},
    404: {"description": "License not found"},
}


@extend_schema(
    operation_id="activate_license",
    summary="Activate License",
    tags=["License Admin API"],
    request=LicenseKeyRequestSerializer,
    responses=_action_responses,
)
class ActivateLicenseView(_LicenseActionView):
    """View for activating licenses (admin)."""

    handler_class = ActivateLicenseHandler
    command_class = ActivateLicenseCommand
    operation = "activate_license"


@extend_schema(
    operation_id="deactivate_license",
    summary="Deactivate License",
    tags=["License Admin API"],
    request=LicenseKeyRequestSerializer,
    responses=_action_responses,
)
class DeactivateLicenseView(_LicenseActionView):
    """View for deactivating licenses (admin)."""

    handler_class = DeactivateLicenseHandler
    command_class = DeactivateLicenseCommand
    operation = "deactivate_license"


@extend_schema(
    operation_id="reset_hardware",
    summary="Reset Hardware Binding",
    description="Clear the device binding so the next validation binds a new device.",
    tags=["License Admin API"],
    request=LicenseKeyRequestSerializer,
    responses=_action_responses,
)
class ResetHardwareView(_LicenseActionView):
    """View for clearing a license's hardware binding (admin)."""

    handler_class = ResetHardwareHandler
    command_class = ResetHardwareCommand
    operation = "reset_hardware"


class RenewLicenseView(APIView):
    """View for changing a license's expiration date (admin)."""

    @extend_schema(
        operation_id="renew_license",
        summary="Renew License",
        description="Set a new expiration date; null makes the license never expire.",
        tags=["License Admin API"],
        request=RenewLicenseRequestSerializer,
        responses=_action_responses,
    )
    def post(self, request: Request) -> Response:
        """Renew a license."""
        serializer = RenewLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = RenewLicenseHandler(license_repository=_license_repo)
        license = async_to_sync(handler.handle)(
            RenewLicenseCommand(
                license_key=serializer.validated_data["license_key"],
                expires_at=serializer.validated_data["expires_at"],
            )
        )
        return Response(
            LicenseSerializer(LicenseDTO.from_entity(license)).data,
            status=status.HTTP_200_OK,
        )


class DeleteLicenseView(APIView):
    """View for deleting licenses (admin)."""

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        tags=["License Admin API"],
        responses={
            200: {"description": "License deleted"},
            401: {"description": "Unauthorized"},
            404: {"description": "License not found"},
        },
    )
    def delete(self, request: Request, license_key: str) -> Response:
        """Delete a license."""
        handler = DeleteLicenseHandler(license_repository=_license_repo)
        async_to_sync(handler.handle)(DeleteLicenseCommand(license_key=license_key))
        return Response(
            {"success": True, "message": "License deleted"},
            status=status.HTTP_200_OK,
        )


def _bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip()
    return ""
