"""Failure kinds for the install callback, each bound to one HTTP status."""

from fastapi import status


class InstallCallbackError(Exception):
    """Base class for every failure the callback turns into an error page."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Installation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MethodNotAllowed(InstallCallbackError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class InvalidSignature(InstallCallbackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid HMAC signature"


class InvalidRequest(InstallCallbackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid callback request"


class TokenExchangeFailed(InstallCallbackError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Token exchange failed"


class UnexpectedFailure(InstallCallbackError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Unexpected error"


class ConfigurationError(UnexpectedFailure):
    default_message = "Shopify app credentials are not configured"
