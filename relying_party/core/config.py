"""
Application configuration models and helpers.

Settings are read from ``RP_*`` environment variables (optionally seeded from a
``.env`` file) and resolved once per process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

import os

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from relying_party.models.oauth import AuthorizationFlowConfig


def _load_env_file(path: str = ".env") -> None:
    """Seed ``os.environ`` from a .env file; variables already set take precedence.

    Nested settings such as ``OAuthSettings`` read only the process environment,
    so this is the single path through which a .env file reaches them.
    """
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        os.environ[key] = value.strip().strip('"').strip("'")


_load_env_file()


class OAuthSettings(BaseSettings):
    """Client registration with the third-party authorization server."""

    client_id: str = Field(..., alias="RP_OAUTH_CLIENT_ID")
    client_secret: str = Field(..., alias="RP_OAUTH_CLIENT_SECRET")
    authorization_endpoint: AnyHttpUrl = Field(
        ..., alias="RP_OAUTH_AUTHORIZATION_ENDPOINT"
    )
    token_endpoint: AnyHttpUrl = Field(..., alias="RP_OAUTH_TOKEN_ENDPOINT")
    redirect_uri: AnyHttpUrl = Field(..., alias="RP_OAUTH_REDIRECT_URI")
    scopes: Annotated[tuple[str, ...], NoDecode] = Field(
        (), alias="RP_OAUTH_SCOPES"
    )
    token_exchange_timeout_seconds: float = Field(
        10.0,
        alias="RP_OAUTH_TOKEN_TIMEOUT",
        gt=0,
        description="Upper bound for the outbound token exchange call.",
    )
    cookie_secure: Optional[bool] = Field(
        None,
        alias="RP_OAUTH_COOKIE_SECURE",
        description=(
            "Force the Secure flag on the state cookie. When unset the flag "
            "follows the scheme of the login request."
        ),
    )

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
        """Support providing scopes as a comma-separated string."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(value)
        return tuple(scope.strip() for scope in value.split(",") if scope.strip())

    model_config = SettingsConfigDict(populate_by_name=True)

    def to_flow_config(self) -> AuthorizationFlowConfig:
        """Freeze the client registration for the flow controller."""
        return AuthorizationFlowConfig(
            client_id=self.client_id,
            client_secret=self.client_secret,
            authorization_endpoint=str(self.authorization_endpoint),
            token_endpoint=str(self.token_endpoint),
            redirect_uri=str(self.redirect_uri),
            scopes=self.scopes,
        )


class AppSettings(BaseSettings):
    """Root settings object for the relying party service."""

    service_name: str = Field("relying-party", alias="RP_SERVICE_NAME")
    environment: str = Field("development", alias="RP_ENV")
    log_level: str = Field("INFO", alias="RP_LOG_LEVEL")
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "OAuthSettings",
    "get_settings",
]
