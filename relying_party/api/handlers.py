"""REST handler descriptors handed to the router."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

from starlette.responses import Response

Endpoint = Callable[..., Awaitable[Response]]


@dataclass(frozen=True)
class HandlerDescriptor:
    """Path, HTTP method and endpoint for one controller API operation."""

    path: str
    method: str
    endpoint: Endpoint


__all__ = ["Endpoint", "HandlerDescriptor"]
