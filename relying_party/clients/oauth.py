"""
OAuth2 authorization-code client.

Builds consent URLs for the authorization server and exchanges authorization
codes at its token endpoint.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
from pydantic import ValidationError

from relying_party.models.oauth import AuthorizationFlowConfig, ExchangeResult

_KNOWN_TOKEN_FIELDS = (
    "access_token",
    "token_type",
    "refresh_token",
    "expires_in",
    "scope",
    "id_token",
)


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint cannot be reached or returns an unusable answer."""


class OAuthClient:
    """Build authorization URLs and exchange authorization codes."""

    def __init__(
        self,
        config: AuthorizationFlowConfig,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._timeout = timeout
        self._transport = transport

    def build_authorization_url(self, state: str) -> str:
        """Construct the consent URL carrying ``state``."""
        params = {
            "client_id": self._config.client_id,
            "redirect_uri": self._config.redirect_uri,
            "response_type": "code",
            "state": state,
        }
        if self._config.scopes:
            params["scope"] = " ".join(self._config.scopes)

        parts = urlsplit(self._config.authorization_endpoint)
        existing = parse_qsl(parts.query, keep_blank_values=True)
        query = urlencode(existing + list(params.items()))
        return urlunsplit(parts._replace(query=query))

    async def exchange_authorization_code(self, code: str) -> ExchangeResult:
        """Trade an authorization code for tokens at the token endpoint."""
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._config.redirect_uri,
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._config.token_endpoint,
                    data=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.TimeoutException as exc:
            raise OAuthTokenExchangeError("Token endpoint timed out.") from exc
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(
                f"Token endpoint request failed: {exc.__class__.__name__}"
            ) from exc

        if not response.is_success:
            raise OAuthTokenExchangeError(
                f"Token endpoint returned HTTP {response.status_code}."
            )

        token_payload = _parse_token_payload(response)
        access_token = token_payload.get("access_token")
        if not access_token:
            raise OAuthTokenExchangeError("Token response is missing access_token.")

        expires_in = token_payload.get("expires_in")
        try:
            expires_in = int(expires_in) if expires_in not in (None, "") else None
        except (TypeError, ValueError) as exc:
            raise OAuthTokenExchangeError("Token response has an invalid expires_in.") from exc

        try:
            return ExchangeResult(
                access_token=str(access_token),
                token_type=token_payload.get("token_type"),
                refresh_token=token_payload.get("refresh_token"),
                expires_in=expires_in,
                scope=token_payload.get("scope"),
                id_token=token_payload.get("id_token"),
                extra={
                    key: value
                    for key, value in token_payload.items()
                    if key not in _KNOWN_TOKEN_FIELDS
                },
            )
        except ValidationError as exc:
            raise OAuthTokenExchangeError("Token response has malformed fields.") from exc


def _parse_token_payload(response: httpx.Response) -> Dict[str, Any]:
    """Decode a JSON or form-encoded token response body."""
    content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in ("application/x-www-form-urlencoded", "text/plain"):
        return dict(parse_qsl(response.text))

    try:
        token_payload = response.json()
    except ValueError as exc:
        raise OAuthTokenExchangeError("Token response is not valid JSON.") from exc
    if not isinstance(token_payload, dict):
        raise OAuthTokenExchangeError("Token response is not a JSON object.")
    return token_payload


__all__ = ["OAuthClient", "OAuthTokenExchangeError"]
