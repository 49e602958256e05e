"""
FastAPI routes for the relying party.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Iterable

from fastapi import APIRouter

from relying_party.api.handlers import HandlerDescriptor

router = APIRouter()


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


def build_router(handlers: Iterable[HandlerDescriptor]) -> APIRouter:
    """Bind controller handler descriptors onto a fresh router."""
    flow_router = APIRouter()
    for handler in handlers:
        flow_router.add_api_route(
            handler.path,
            handler.endpoint,
            methods=[handler.method],
            include_in_schema=False,
        )
    return flow_router


__all__ = ["build_router", "router"]
