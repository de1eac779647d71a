"""Pytest configuration and fixtures for the install callback test suite.

Provides:
- Shopify app credentials in the environment for every test
- An async HTTP client bound to the ASGI app
- Helpers to sign callback query params the way Shopify does
- A mocked Shopify token exchange endpoint
"""

from collections.abc import AsyncGenerator, Callable, Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import AppCredentials
from app.main import app

# ---------------------------------------------------------------------------
# Test constants for Shopify
# ---------------------------------------------------------------------------
SHOPIFY_TEST_CLIENT_ID = "test-shopify-client-id"
SHOPIFY_TEST_CLIENT_SECRET = "test-shopify-client-secret"
SHOPIFY_TEST_SHOP = "test-store.myshopify.com"
SHOPIFY_TEST_ACCESS_TOKEN = "shpat_test_access_token_123"
SHOPIFY_TEST_SCOPE = "read_products,read_orders"

CALLBACK_URL = "/api/v1/shopify/callback"


@pytest.fixture(autouse=True)
def set_shopify_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure Shopify credentials are present in the environment for all tests.

    This is autouse=True so all tests have consistent Shopify config.
    Tests that need missing credentials call ``monkeypatch.delenv``.
    """
    monkeypatch.setenv("SHOPIFY_CLIENT_ID", SHOPIFY_TEST_CLIENT_ID)
    monkeypatch.setenv("SHOPIFY_CLIENT_SECRET", SHOPIFY_TEST_CLIENT_SECRET)


@pytest.fixture
def credentials() -> AppCredentials:
    """Credentials object matching the test environment."""
    return AppCredentials(
        client_id=SHOPIFY_TEST_CLIENT_ID,
        client_secret=SHOPIFY_TEST_CLIENT_SECRET,
    )


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def plain_client() -> AsyncGenerator[AsyncClient, None]:
    """Minimal async test client with NO dependency overrides."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Signing helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def shopify_oauth_hmac() -> Callable[[dict[str, str]], str]:
    """Generate a valid Shopify OAuth callback HMAC for query params.

    Shopify's OAuth callback includes an HMAC computed over the sorted
    ``name=value`` pairs (excluding ``hmac`` and ``signature``), joined
    with ``&`` and left unencoded.

    Usage:
        params = {"code": "abc", "shop": "store.myshopify.com", "state": "nonce123"}
        params["hmac"] = shopify_oauth_hmac(params)
    """
    import hashlib
    import hmac

    def _compute(params: dict[str, str]) -> str:
        message = "&".join(
            f"{k}={v}" for k, v in sorted(params.items()) if k not in ("hmac", "signature")
        )
        return hmac.new(
            SHOPIFY_TEST_CLIENT_SECRET.encode(),
            message.encode(),
            hashlib.sha256,
        ).hexdigest()

    return _compute


@pytest.fixture
def signed_callback_params(
    shopify_oauth_hmac: Callable[[dict[str, str]], str],
) -> Callable[..., dict[str, str]]:
    """Build a signed set of callback query params.

    Usage:
        params = signed_callback_params(shop="other.myshopify.com")
    """

    def _build(**overrides: str) -> dict[str, str]:
        params = {
            "code": "auth-code-123",
            "shop": SHOPIFY_TEST_SHOP,
            "state": "nonce-abc",
            "timestamp": "1700000000",
        }
        params.update(overrides)
        params["hmac"] = shopify_oauth_hmac(params)
        return params

    return _build


# ---------------------------------------------------------------------------
# Mocked token exchange
# ---------------------------------------------------------------------------


def make_token_response(
    status_code: int = 200,
    payload: dict[str, str] | None = None,
    reason_phrase: str = "OK",
) -> MagicMock:
    """Build a mock httpx response for the token endpoint."""
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.reason_phrase = reason_phrase
    response.json.return_value = (
        payload
        if payload is not None
        else {"access_token": SHOPIFY_TEST_ACCESS_TOKEN, "scope": SHOPIFY_TEST_SCOPE}
    )
    return response


@pytest.fixture
def mock_shopify_token_exchange() -> Generator[AsyncMock, None, None]:
    """Mock the Shopify OAuth token exchange HTTP call.

    Patches httpx.AsyncClient in oauth.py to return a mock access token + scopes.
    Tests can replace ``mock_client.post.return_value`` or ``side_effect``.
    """
    with patch("app.integrations.shopify.oauth.httpx.AsyncClient") as mock_class:
        mock_client = AsyncMock()
        mock_class.return_value.__aenter__.return_value = mock_client
        mock_client.post.return_value = make_token_response()

        yield mock_client
