"""Issue and validate anti-CSRF state values bound to the browser by cookie."""

from __future__ import annotations

import base64
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from relying_party.models.oauth import StateToken

STATE_VALUE_BYTES = 32
STATE_COOKIE_TTL = timedelta(minutes=20)


class StateGenerationError(Exception):
    """Raised when no unpredictable state value can be produced."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StateTokenManager:
    """
    Stateless state-token issuer.

    The issued value lives only in the caller's cookie; validation is a plain
    comparison of that cookie with the ``state`` parameter echoed back by the
    authorization server.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
        ttl: timedelta = STATE_COOKIE_TTL,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._ttl = ttl

    def issue_state(self, *, secure: bool = False) -> StateToken:
        """Generate a fresh state value and its cookie directive."""
        try:
            raw = secrets.token_bytes(STATE_VALUE_BYTES)
        except (OSError, NotImplementedError) as exc:
            self._logger.error("Secure random source unavailable for OAuth state: %s", exc)
            raise StateGenerationError("Unable to generate OAuth state value.") from exc

        value = base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
        return StateToken(
            value=value,
            expires_at=self._clock() + self._ttl,
            secure=secure,
        )

    def validate_state(
        self, cookie_value: Optional[str], supplied_state: Optional[str]
    ) -> bool:
        """Return True only when the cookie is present and equals the supplied state."""
        if not cookie_value:
            self._logger.warning("OAuth state cookie missing from callback request.")
            return False

        expected = cookie_value.encode("utf-8")
        actual = (supplied_state or "").encode("utf-8")
        if not hmac.compare_digest(expected, actual):
            self._logger.warning("OAuth state parameter does not match state cookie.")
            return False
        return True


__all__ = [
    "STATE_COOKIE_TTL",
    "STATE_VALUE_BYTES",
    "StateGenerationError",
    "StateTokenManager",
]
