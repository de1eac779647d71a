"""API v1 router combining all route modules."""

from fastapi import APIRouter

from app.api.v1 import health, shopify

api_router = APIRouter()

# Include health check routes (no prefix)
api_router.include_router(health.router)

# Shopify OAuth callback (no auth - verified via HMAC)
api_router.include_router(
    shopify.router,
    prefix="/shopify",
    tags=["shopify"],
)
