"""Domain models shared by the authorization flow."""

from .oauth import (
    STATE_COOKIE_NAME,
    AuthorizationFlowConfig,
    ExchangeResult,
    StateToken,
)

__all__ = [
    "STATE_COOKIE_NAME",
    "AuthorizationFlowConfig",
    "ExchangeResult",
    "StateToken",
]
