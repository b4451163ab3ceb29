"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Each family maps to one
HTTP status in api.exceptions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


# Invalid input


class InvalidInputError(DomainException):
    """Base exception for missing or malformed input."""

    def __init__(self, message: str = "Invalid input", code: str = "INVALID_INPUT"):
        super().__init__(message, code=code)


class MissingParameterError(InvalidInputError):
    """Raised when a required parameter is absent."""

    def __init__(self, message: str = "Missing required parameter"):
        super().__init__(message, code="MISSING_PARAMETER")


class InvalidLicenseFormatError(InvalidInputError):
    """Raised when a license key does not match XXXX-XXXX-XXXX-XXXX."""

    def __init__(self, message: str = "Invalid license key format"):
        super().__init__(message, code="INVALID_LICENSE_FORMAT")


class InvalidTierError(InvalidInputError):
    """Raised when a tier is not one of the configured tiers."""

    def __init__(self, message: str = "Invalid tier"):
        super().__init__(message, code="INVALID_TIER")


# Not found


class NotFoundError(DomainException):
    """Base exception for absent records."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class OrderNotFoundError(NotFoundError):
    """Raised when an order is not found."""

    def __init__(self, message: str = "Order not found"):
        super().__init__(message, code="ORDER_NOT_FOUND")


# Conflict


class ConflictError(DomainException):
    """Base exception for unique-identifier collisions and illegal repeats."""

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class DuplicateLicenseKeyError(ConflictError):
    """Raised when a license key already exists."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE_KEY")


class DuplicateOrderError(ConflictError):
    """Raised when an order id already exists."""

    def __init__(self, message: str = "Order already exists"):
        super().__init__(message, code="DUPLICATE_ORDER")


class OrderAlreadyCompletedError(ConflictError):
    """Raised when capturing an order that is no longer pending."""

    def __init__(self, message: str = "Order already completed"):
        super().__init__(message, code="ORDER_ALREADY_COMPLETED")


# Unauthorized


class UnauthorizedError(DomainException):
    """Base exception for failed authentication."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(message, code=code)


class InvalidCredentialsError(UnauthorizedError):
    """Raised when administrator credentials are wrong."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidTokenError(UnauthorizedError):
    """Raised when a token is missing, malformed or badly signed."""

    def __init__(self, message: str = "Invalid token", code: str = "INVALID_TOKEN"):
        super().__init__(message, code=code)


class TokenExpiredError(InvalidTokenError):
    """Raised when a token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


# State violation


class StateViolationError(DomainException):
    """Base exception for licenses that exist but may not be used."""

    def __init__(self, message: str = "License state violation", code: str = "STATE_VIOLATION"):
        super().__init__(message, code=code)


class LicenseDeactivatedError(StateViolationError):
    """Raised when a license has been deactivated by an administrator."""

    def __init__(self, message: str = "License has been deactivated"):
        super().__init__(message, code="LICENSE_DEACTIVATED")


class LicenseExpiredError(StateViolationError):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License has expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


class HardwareMismatchError(StateViolationError):
    """Raised when a license is bound to a different device."""

    def __init__(self, message: str = "License is bound to a different device"):
        super().__init__(message, code="HARDWARE_MISMATCH")


# Upstream failure


class UpstreamFailureError(DomainException):
    """Base exception for payment gateway and other collaborator failures."""

    def __init__(self, message: str = "Upstream service failure", code: str = "UPSTREAM_FAILURE"):
        super().__init__(message, code=code)


class PaymentGatewayError(UpstreamFailureError):
    """Raised when the payment gateway errors or times out."""

    def __init__(self, message: str = "Payment gateway error"):
        super().__init__(message, code="PAYMENT_GATEWAY_ERROR")


class PaymentCaptureError(UpstreamFailureError):
    """Raised when the payment gateway reports a non-completed capture."""

    def __init__(self, message: str = "Payment not completed", status: str = None):
        super().__init__(message, code="PAYMENT_NOT_COMPLETED")
        self.status = status


class OfflineModeUnavailableError(UpstreamFailureError):
    """Raised when an offline-only operation is requested while a gateway is configured."""

    def __init__(self, message: str = "Test purchases are disabled when a payment gateway is configured"):
        super().__init__(message, code="OFFLINE_MODE_UNAVAILABLE")


# Exhausted


class ExhaustedError(DomainException):
    """Base exception for spent retry budgets."""

    def __init__(self, message: str = "Retry budget exhausted", code: str = "EXHAUSTED"):
        super().__init__(message, code=code)


class KeySpaceExhaustedError(ExhaustedError):
    """Raised when no unused license key was found within the attempt bound."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="KEY_SPACE_EXHAUSTED")
