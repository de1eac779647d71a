"""Shopify OAuth helpers for HMAC verification and token exchange."""

import hashlib
import hmac
import re
from collections.abc import Mapping

import httpx
from pydantic import ValidationError

from app.core.config import AppCredentials, settings
from app.core.exceptions import TokenExchangeFailed
from app.schemas.shopify import TokenExchangeResult

# Parameters that carry the signature and are left out of the signed message
SIGNATURE_PARAMS = frozenset({"hmac", "signature"})

ACCESS_TOKEN_PATH = "/admin/oauth/access_token"


def build_canonical_message(query_params: Mapping[str, str]) -> str:
    """Serialize callback params the way Shopify does before signing them.

    Every parameter except ``hmac`` and ``signature`` is kept, names are
    sorted, and pairs are joined as ``name=value`` with ``&``. Values are
    used as received, without URL encoding.

    Args:
        query_params: All query parameters from the callback URL.

    Returns:
        The message Shopify computed the HMAC over.
    """
    return "&".join(
        f"{name}={query_params[name]}"
        for name in sorted(query_params)
        if name not in SIGNATURE_PARAMS
    )


def compute_hmac(message: str, secret: str) -> str:
    """HMAC-SHA256 of ``message`` keyed by ``secret``, as lowercase hex."""
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_hmac(query_params: Mapping[str, str], secret: str) -> bool:
    """Verify Shopify OAuth callback HMAC signature.

    The comparison runs in constant time. A missing, truncated or non-hex
    ``hmac`` value is reported as a mismatch rather than raised.

    Args:
        query_params: All query parameters from the callback URL.
        secret: The Shopify client secret.

    Returns:
        True if HMAC is valid.
    """
    received_hmac = query_params.get("hmac") or ""
    computed = compute_hmac(build_canonical_message(query_params), secret)

    return hmac.compare_digest(
        computed.encode("utf-8"),
        received_hmac.lower().encode("utf-8"),
    )


def is_valid_shop_domain(shop: str, suffix: str | None = None) -> bool:
    """Check that ``shop`` is a bare store hostname under the platform domain.

    Rejects schemes, paths, ports, credentials and other hosts so the value is
    safe to use as the host of the token exchange URL.
    """
    suffix = suffix if suffix is not None else settings.shopify_shop_domain_suffix
    pattern = rf"[a-z0-9][a-z0-9\-]*{re.escape(suffix)}"
    return re.fullmatch(pattern, shop, flags=re.IGNORECASE) is not None


def build_token_url(shop: str) -> str:
    """URL of the shop's OAuth access token endpoint."""
    return f"https://{shop}{ACCESS_TOKEN_PATH}"


async def exchange_code_for_token(
    shop: str,
    code: str,
    credentials: AppCredentials,
    timeout: float | None = None,
) -> TokenExchangeResult:
    """Exchange the OAuth authorization code for a permanent access token.

    A single attempt is made; there is no retry.

    Args:
        shop: The shop domain.
        code: The authorization code from Shopify.
        credentials: The app's client id and secret.
        timeout: Seconds to wait for Shopify. Defaults to
            ``settings.shopify_token_exchange_timeout``.

    Returns:
        The access token and granted scopes.

    Raises:
        TokenExchangeFailed: If Shopify answers with a non-2xx status or an
            unusable body.
        httpx.HTTPError: On transport failures and timeouts.
    """
    if timeout is None:
        timeout = settings.shopify_token_exchange_timeout

    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(
            build_token_url(shop),
            json={
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret.get_secret_value(),
                "code": code,
            },
            headers={"Accept": "application/json"},
        )

    if not response.is_success:
        reason = response.reason_phrase or str(response.status_code)
        raise TokenExchangeFailed(f"Token exchange failed: {reason}")

    try:
        return TokenExchangeResult.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise TokenExchangeFailed("Token exchange returned an invalid response") from exc
