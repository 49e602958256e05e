"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from relying_party.models.oauth import AuthorizationFlowConfig


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def flow_config() -> AuthorizationFlowConfig:
    return AuthorizationFlowConfig(
        client_id="client-123",
        client_secret="secret-456",
        authorization_endpoint="https://auth.example.com/oauth2/authorize",
        token_endpoint="https://auth.example.com/oauth2/token",
        redirect_uri="https://rp.example.com/callback",
        scopes=("openid", "profile"),
    )
