"""Shopify OAuth install callback endpoint."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.core.deps import InstallCallback

router = APIRouter()

# Registered for every method so non-GET requests get the HTML 405 page
# from the callback handler instead of the router's JSON one.
CALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/callback", methods=CALLBACK_METHODS, response_class=HTMLResponse)
async def callback(request: Request, service: InstallCallback) -> HTMLResponse:
    """Handle Shopify OAuth callback.

    Verifies the HMAC, exchanges the authorization code for an access token
    and renders a confirmation (or error) page for the merchant.
    """
    result = await service.handle(request.method, dict(request.query_params))
    return HTMLResponse(
        content=result.html,
        status_code=result.status_code,
        headers={"Cache-Control": "no-store", **result.headers},
    )
