"""Pydantic schemas for the Shopify install callback."""

from pydantic import ConfigDict, Field

from app.schemas.common import BaseSchema


def split_scopes(scope: str) -> list[str]:
    """Split a granted scope string on commas and/or whitespace."""
    return scope.replace(",", " ").split()


class CallbackParams(BaseSchema):
    """Query parameters Shopify sends to the OAuth redirect URL.

    Parameters beyond the named ones (``timestamp``, ``host``, ...) are kept
    because they are part of the signed message.
    """

    model_config = ConfigDict(extra="allow")

    code: str = Field(min_length=1)
    shop: str = Field(min_length=1)
    hmac: str = ""
    state: str = ""


class TokenExchangeResult(BaseSchema):
    """Shopify's answer to a successful authorization code exchange."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1, repr=False)
    scope: str = ""

    @property
    def scopes(self) -> list[str]:
        """Granted scopes as a list, accepting comma or space separators."""
        return split_scopes(self.scope)
