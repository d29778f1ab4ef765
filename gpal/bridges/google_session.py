"""In-memory holder for the Google Calendar credential.

One ``CalendarSession`` is created per process and injected into the
calendar gateway. Whatever performs the OAuth exchange hands the resulting
token dict to :meth:`CalendarSession.set_credentials`; the gateway reads the
token back before every API call. Tokens are never written to disk.

Token dict format::

    {
        "access_token": "ya29.a0...",
        "refresh_token": "1//0e...",
        "expires_at": 1700000000.0,
        "token_type": "Bearer",
        "scope": "https://www.googleapis.com/auth/calendar"
    }
"""

import time
from typing import Any, Optional

import structlog

from gpal.core.errors import CalendarNotConnectedError

logger = structlog.get_logger(__name__)


class CalendarSession:
    """Owns the process-wide calendar credential.

    Concurrent requests read the same credential; replacing it while a
    request is in flight is not guarded against.
    """

    def __init__(self, tokens: Optional[dict[str, Any]] = None) -> None:
        self._tokens: Optional[dict[str, Any]] = None
        if tokens:
            self.set_credentials(tokens)

    @classmethod
    def from_static_token(cls, access_token: str) -> "CalendarSession":
        """Create a session seeded with a pre-issued Bearer token."""
        if not access_token:
            return cls()
        return cls({"access_token": access_token, "token_type": "Bearer"})

    def set_credentials(self, tokens: dict[str, Any]) -> None:
        """Replace the held credential."""
        self._tokens = dict(tokens)
        logger.info("Calendar credentials set", has_refresh_token=bool(tokens.get("refresh_token")))

    def clear(self) -> None:
        """Drop the held credential."""
        self._tokens = None
        logger.info("Calendar credentials cleared")

    @property
    def is_connected(self) -> bool:
        """True iff an unexpired access token is held."""
        if not self._tokens or not self._tokens.get("access_token"):
            return False
        expires_at = self._tokens.get("expires_at")
        return expires_at is None or time.time() < expires_at

    def access_token(self) -> str:
        """Return the current access token.

        Raises:
            CalendarNotConnectedError: If no usable token is held.
        """
        if not self.is_connected:
            raise CalendarNotConnectedError("Google Calendar is not connected.")
        return self._tokens["access_token"]

    def auth_headers(self) -> dict[str, str]:
        """HTTP headers carrying the current Bearer token."""
        return {
            "Authorization": f"Bearer {self.access_token()}",
            "Content-Type": "application/json",
        }
