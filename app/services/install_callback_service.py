"""Completes a Shopify app install from the OAuth redirect callback."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from fastapi import status
from pydantic import ValidationError

from app.core.config import AppCredentials
from app.core.exceptions import (
    ConfigurationError,
    InstallCallbackError,
    InvalidRequest,
    InvalidSignature,
    MethodNotAllowed,
    UnexpectedFailure,
)
from app.integrations.shopify.oauth import (
    exchange_code_for_token,
    is_valid_shop_domain,
    verify_hmac,
)
from app.schemas.shopify import CallbackParams
from app.services.install_pages import render_error_page, render_success_page

logger = logging.getLogger(__name__)

ALLOWED_METHOD = "GET"
REDACTED = "[redacted]"


@dataclass(frozen=True)
class CallbackResponse:
    """Rendered outcome of one callback request."""

    status_code: int
    html: str
    headers: dict[str, str] = field(default_factory=dict)


class InstallCallbackService:
    """Verifies a callback, exchanges its code and renders the result.

    Every failure is converted into an error page; ``handle`` never raises
    for anything that happens while processing the request.
    """

    def __init__(self, credentials: AppCredentials) -> None:
        self.credentials = credentials

    async def handle(self, method: str, query_params: Mapping[str, str]) -> CallbackResponse:
        """Process one callback and return the page to send back."""
        try:
            params, html, scope = await self._complete_install(method, query_params)
        except InstallCallbackError as exc:
            return self._failure(exc)
        except Exception as exc:
            return self._failure(UnexpectedFailure(str(exc) or type(exc).__name__), cause=exc)

        logger.info("App installed for %s with scopes: %s", params.shop, scope)
        return CallbackResponse(status_code=status.HTTP_200_OK, html=html)

    async def _complete_install(
        self, method: str, query_params: Mapping[str, str]
    ) -> tuple[CallbackParams, str, str]:
        if method.upper() != ALLOWED_METHOD:
            raise MethodNotAllowed()

        if not self.credentials.is_configured:
            raise ConfigurationError()

        secret = self.credentials.client_secret.get_secret_value()
        if not verify_hmac(query_params, secret):
            raise InvalidSignature()

        params = self._parse_params(query_params)
        result = await exchange_code_for_token(params.shop, params.code, self.credentials)
        return params, render_success_page(params.shop, result.scope), result.scope

    @staticmethod
    def _parse_params(query_params: Mapping[str, str]) -> CallbackParams:
        """Check the signed params carry a usable code and shop."""
        try:
            params = CallbackParams.model_validate(dict(query_params))
        except ValidationError as exc:
            missing = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            raise InvalidRequest(f"Missing required parameter: {missing}") from exc

        if not is_valid_shop_domain(params.shop):
            raise InvalidRequest("Invalid shop domain")
        return params

    def _failure(
        self, exc: InstallCallbackError, cause: Exception | None = None
    ) -> CallbackResponse:
        message = self._redact(exc.message)
        if cause is not None:
            logger.error("OAuth callback error: %s (%s)", message, type(cause).__name__)
        else:
            logger.error("OAuth callback error: %s", message)

        headers = {"Allow": ALLOWED_METHOD} if isinstance(exc, MethodNotAllowed) else {}
        return CallbackResponse(
            status_code=exc.status_code,
            html=render_error_page(message),
            headers=headers,
        )

    def _redact(self, message: str) -> str:
        secret = self.credentials.client_secret.get_secret_value()
        if secret:
            message = message.replace(secret, REDACTED)
        return message
