"""
Authorization-code flow endpoints.

``/login`` issues a state cookie and redirects the browser to the authorization
server. ``/callback`` checks the echoed state against that cookie, exchanges the
code and hands the tokens to the credential issuer. Every failure on the
callback path ends in the same redirect home.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Optional, Protocol

import anyio
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.types import Receive, Scope, Send

from relying_party.api.handlers import HandlerDescriptor
from relying_party.clients.oauth import OAuthTokenExchangeError
from relying_party.models.oauth import (
    STATE_COOKIE_NAME,
    AuthorizationFlowConfig,
    ExchangeResult,
)
from relying_party.services.credential_issuer import CredentialIssuer
from relying_party.services.state_tokens import StateGenerationError, StateTokenManager

LOGIN_PATH = "/login"
CALLBACK_PATH = "/callback"
HOME_PATH = "/"

STATE_PARAM = "state"
CODE_PARAM = "code"


class AuthorizationServerClient(Protocol):
    def build_authorization_url(self, state: str) -> str: ...

    async def exchange_authorization_code(self, code: str) -> ExchangeResult: ...


class ClientDisconnected(Exception):
    """Raised when the browser goes away before the token exchange finishes."""


class _AbandonedResponse(Response):
    """Sends nothing: the client has already disconnected."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        return None


class AuthorizationFlowController:
    """Drive the OAuth2 authorization-code grant as a relying party."""

    def __init__(
        self,
        config: AuthorizationFlowConfig,
        *,
        oauth_client: AuthorizationServerClient,
        state_manager: StateTokenManager,
        credential_issuer: CredentialIssuer,
        logger: Optional[logging.Logger] = None,
        cookie_secure: Optional[bool] = None,
    ) -> None:
        self._config = config
        self._oauth_client = oauth_client
        self._state_manager = state_manager
        self._credential_issuer = credential_issuer
        self._logger = logger or logging.getLogger(__name__)
        self._cookie_secure = cookie_secure
        self._handlers = self._register_handlers()

    @property
    def config(self) -> AuthorizationFlowConfig:
        return self._config

    def get_rest_handlers(self) -> tuple[HandlerDescriptor, ...]:
        """Return the endpoints this controller exposes."""
        return self._handlers

    def _register_handlers(self) -> tuple[HandlerDescriptor, ...]:
        return (
            HandlerDescriptor(LOGIN_PATH, "GET", self.login),
            HandlerDescriptor(CALLBACK_PATH, "GET", self.callback),
        )

    async def login(self, request: Request) -> Response:
        """Redirect to the authorization server with a freshly issued state."""
        secure = self._cookie_secure
        if secure is None:
            secure = request.url.scheme == "https"

        try:
            state = self._state_manager.issue_state(secure=secure)
        except StateGenerationError as exc:
            self._logger.error("Login aborted: %s", exc)
            raise HTTPException(
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                detail="Unable to start login.",
            ) from exc

        authorization_url = self._oauth_client.build_authorization_url(state=state.value)
        response = RedirectResponse(
            url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT
        )
        state.set_cookie(response)
        return response

    async def callback(self, request: Request) -> Response:
        """Validate state, exchange the code and answer with the issuer's outcome."""
        cookie_value = request.cookies.get(STATE_COOKIE_NAME)
        supplied_state = request.query_params.get(STATE_PARAM)
        if not self._state_manager.validate_state(cookie_value, supplied_state):
            return self._redirect_home()

        code = request.query_params.get(CODE_PARAM)
        if not code:
            self._logger.error("OAuth callback aborted: authorization code missing.")
            return self._redirect_home()

        try:
            result = await self._exchange_while_connected(request, code)
        except OAuthTokenExchangeError as exc:
            self._logger.error(
                "OAuth token exchange failed: %s", exc, exc_info=exc.__cause__
            )
            return self._redirect_home()
        except ClientDisconnected:
            self._logger.info("Client disconnected during token exchange; login abandoned.")
            return _AbandonedResponse()

        try:
            outcome = await self._credential_issuer.issue(result)
        except Exception:
            self._logger.exception("Credential issuer failed after token exchange.")
            return self._redirect_home()

        if outcome.redirect_to is not None:
            return RedirectResponse(
                url=outcome.redirect_to, status_code=HTTPStatus.TEMPORARY_REDIRECT
            )
        return self._write_document(outcome.document.to_document())

    async def _exchange_while_connected(
        self, request: Request, code: str
    ) -> ExchangeResult:
        """Run the token exchange, cancelling it if the client disconnects first."""
        outcome: dict[str, Any] = {}

        async with anyio.create_task_group() as task_group:

            async def exchange() -> None:
                try:
                    outcome["result"] = await self._oauth_client.exchange_authorization_code(
                        code
                    )
                except OAuthTokenExchangeError as exc:
                    outcome["error"] = exc
                except Exception as exc:
                    error = OAuthTokenExchangeError(f"Token exchange raised {exc!r}")
                    error.__cause__ = exc
                    outcome["error"] = error
                task_group.cancel_scope.cancel()

            async def listen_for_disconnect() -> None:
                while True:
                    message = await request.receive()
                    if message["type"] == "http.disconnect":
                        break
                task_group.cancel_scope.cancel()

            task_group.start_soon(exchange)
            await listen_for_disconnect()

        if "error" in outcome:
            raise outcome["error"]
        if "result" not in outcome:
            raise ClientDisconnected()
        return outcome["result"]

    def _write_document(self, document: dict[str, Any]) -> Response:
        try:
            return JSONResponse(content=document)
        except (TypeError, ValueError):
            self._logger.exception("Unable to serialize login response document.")
            return Response(status_code=HTTPStatus.INTERNAL_SERVER_ERROR)

    @staticmethod
    def _redirect_home() -> RedirectResponse:
        return RedirectResponse(url=HOME_PATH, status_code=HTTPStatus.TEMPORARY_REDIRECT)


__all__ = [
    "CALLBACK_PATH",
    "LOGIN_PATH",
    "AuthorizationFlowController",
    "AuthorizationServerClient",
]
