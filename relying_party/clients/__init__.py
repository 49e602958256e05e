"""Expose constructed client wrappers."""

from .oauth import OAuthClient, OAuthTokenExchangeError

__all__ = ["OAuthClient", "OAuthTokenExchangeError"]
