"""
FastAPI application entrypoint for the relying party service.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from relying_party.api.flow import AuthorizationFlowController
from relying_party.api.routes import build_router
from relying_party.api.routes import router as api_router
from relying_party.core.config import AppSettings, get_settings
from relying_party.core.logging import configure_logging
from relying_party.dependencies import get_flow_controller


def create_app(
    settings: Optional[AppSettings] = None,
    controller: Optional[AuthorizationFlowController] = None,
) -> FastAPI:
    """Factory for the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if controller is None:
        controller = get_flow_controller(settings)

    app = FastAPI(
        title=settings.service_name,
        version="0.1.0",
        description="OAuth2 authorization-code relying party.",
    )
    app.include_router(api_router)
    app.include_router(build_router(controller.get_rest_handlers()))
    return app


__all__ = ["create_app"]
