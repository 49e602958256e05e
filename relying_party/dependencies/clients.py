"""
Factory functions that wire configuration into the flow collaborators.
"""

import logging
from functools import lru_cache
from typing import Optional

from relying_party.api.flow import AuthorizationFlowController
from relying_party.clients import OAuthClient
from relying_party.core.config import AppSettings, get_settings
from relying_party.services import SampleCredentialIssuer, StateTokenManager


@lru_cache()
def _settings() -> AppSettings:
    """Internal helper to cache settings for client factories."""
    return get_settings()


def _build_oauth_client(settings: AppSettings) -> OAuthClient:
    return OAuthClient(
        settings.oauth.to_flow_config(),
        timeout=settings.oauth.token_exchange_timeout_seconds,
    )


@lru_cache()
def get_oauth_client() -> OAuthClient:
    """Create a singleton OAuth client for the configured authorization server."""
    return _build_oauth_client(_settings())


@lru_cache()
def get_state_token_manager() -> StateTokenManager:
    """Provide the state token manager."""
    return StateTokenManager(logger=logging.getLogger("relying_party.state"))


@lru_cache()
def get_credential_issuer() -> SampleCredentialIssuer:
    """Provide the credential issuer invoked after a successful exchange."""
    return SampleCredentialIssuer()


def get_flow_controller(
    settings: Optional[AppSettings] = None,
) -> AuthorizationFlowController:
    """Build the authorization flow controller, defaulting to process settings."""
    if settings is None:
        settings = _settings()
        oauth_client = get_oauth_client()
    else:
        oauth_client = _build_oauth_client(settings)

    return AuthorizationFlowController(
        settings.oauth.to_flow_config(),
        oauth_client=oauth_client,
        state_manager=get_state_token_manager(),
        credential_issuer=get_credential_issuer(),
        logger=logging.getLogger("relying_party.flow"),
        cookie_secure=settings.oauth.cookie_secure,
    )


__all__ = [
    "get_credential_issuer",
    "get_flow_controller",
    "get_oauth_client",
    "get_state_token_manager",
]
