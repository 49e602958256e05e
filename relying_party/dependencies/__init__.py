"""Expose factories for the flow controller and its collaborators."""

from .clients import (
    get_credential_issuer,
    get_flow_controller,
    get_oauth_client,
    get_state_token_manager,
)

__all__ = [
    "get_credential_issuer",
    "get_flow_controller",
    "get_oauth_client",
    "get_state_token_manager",
]
