"""Dependency injection for FastAPI routes."""

from typing import Annotated

from fastapi import Depends

from app.core.config import AppCredentials
from app.services.install_callback_service import InstallCallbackService


def get_app_credentials() -> AppCredentials:
    """Load the Shopify app credentials from the environment for this request."""
    return AppCredentials()


Credentials = Annotated[AppCredentials, Depends(get_app_credentials)]


def get_install_callback_service(credentials: Credentials) -> InstallCallbackService:
    """Build the callback service around the request's credentials."""
    return InstallCallbackService(credentials)


InstallCallback = Annotated[InstallCallbackService, Depends(get_install_callback_service)]
