"""
Domain models for the OAuth2 authorization-code exchange.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import Response

STATE_COOKIE_NAME = "oauthstate"


class AuthorizationFlowConfig(BaseModel):
    """Client registration used to drive the authorization-code grant."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str = Field(..., repr=False)
    authorization_endpoint: str
    token_endpoint: str
    redirect_uri: str
    scopes: tuple[str, ...] = ()


class StateToken(BaseModel):
    """Anti-CSRF state value and the cookie directive that binds it to a browser."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., repr=False)
    expires_at: datetime
    cookie_name: str = STATE_COOKIE_NAME
    secure: bool = False

    def set_cookie(self, response: Response) -> None:
        """Attach the state cookie to ``response``."""
        response.set_cookie(
            key=self.cookie_name,
            value=self.value,
            expires=self.expires_at,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )


class ExchangeResult(BaseModel):
    """Tokens returned by the authorization server for one authorization code."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., repr=False)
    token_type: Optional[str] = None
    refresh_token: Optional[str] = Field(None, repr=False)
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    id_token: Optional[str] = Field(None, repr=False)
    extra: Dict[str, Any] = Field(default_factory=dict, repr=False)


__all__ = [
    "STATE_COOKIE_NAME",
    "AuthorizationFlowConfig",
    "ExchangeResult",
    "StateToken",
]
