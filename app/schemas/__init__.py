"""Pydantic schemas for request/response validation."""

from app.schemas.common import HealthResponse, RootResponse
from app.schemas.shopify import CallbackParams, TokenExchangeResult

__all__ = [
    "CallbackParams",
    "HealthResponse",
    "RootResponse",
    "TokenExchangeResult",
]
