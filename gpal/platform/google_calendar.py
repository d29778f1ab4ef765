"""Google Calendar gateway using the Calendar API v3 over httpx.

The Bearer token is read from the injected :class:`CalendarSession` before
every request, so a credential set after startup is picked up immediately.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from gpal.bridges.google_session import CalendarSession
from gpal.core.errors import CalendarGatewayError, CalendarNotConnectedError
from gpal.models.schemas import CalendarEvent, ResolvedEvent
from gpal.platform.base import CalendarGateway

logger = structlog.get_logger(__name__)


class GoogleCalendarGateway(CalendarGateway):
    """Google Calendar API v3 implementation of CalendarGateway."""

    BASE_URL = "https://www.googleapis.com/calendar/v3"
    REQUEST_TIMEOUT = 15.0

    def __init__(
        self,
        session: CalendarSession,
        calendar_id: str = "primary",
        timeout_seconds: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the Google Calendar gateway.

        Args:
            session: Holder of the calendar credential.
            calendar_id: Calendar to operate on.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (used by tests).
        """
        self.session = session
        self.calendar_id = calendar_id
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        logger.info("GoogleCalendarGateway initialized", calendar=calendar_id)

    # ── Private helpers ───────────────────────────────────────────

    @property
    def _events_path(self) -> str:
        return f"/calendars/{quote(self.calendar_id, safe='')}/events"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json_body: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an authenticated request to the Google Calendar API.

        Returns:
            Parsed JSON response (empty dict for 204 / empty bodies).

        Raises:
            CalendarNotConnectedError: If no token is held or Google answers 401
                (the session is cleared on 401).
            CalendarGatewayError: On any other HTTP or transport failure.
        """
        headers = self.session.auth_headers()
        url = f"{self.BASE_URL}{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.request(
                    method,
                    url,
                    headers=headers,
                    params=params,
                    json=json_body,
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 401:
                self.session.clear()
                raise CalendarNotConnectedError("Google rejected the calendar credential") from exc
            raise CalendarGatewayError(exc.response.text[:200], status_code=status) from exc
        except httpx.HTTPError as exc:
            raise CalendarGatewayError(f"{type(exc).__name__}: {exc}") from exc

        if resp.status_code == 204 or not resp.content:
            return {}
        return resp.json()

    @staticmethod
    def _to_calendar_event(item: dict[str, Any]) -> CalendarEvent:
        start = item.get("start", {})
        end = item.get("end", {})
        return CalendarEvent(
            id=item.get("id", ""),
            summary=item.get("summary") or "",
            start=start.get("dateTime") or start.get("date", ""),
            end=end.get("dateTime") or end.get("date", ""),
            description=item.get("description") or "",
        )

    # ── CalendarGateway interface ─────────────────────────────────

    async def create(self, event: ResolvedEvent) -> dict[str, Any]:
        """Insert an event into the calendar.

        Args:
            event: Fully resolved event payload.

        Returns:
            The created event resource as returned by Google.
        """
        data = await self._request("POST", self._events_path, json_body=event.to_api_body())
        logger.info(
            "Created Google Calendar event",
            event_id=data.get("id"),
            title=event.summary,
            calendar=self.calendar_id,
        )
        return data

    async def list_events(
        self,
        time_min: str,
        time_max: str,
        max_results: int,
        order_by: str = "startTime",
        single_events: bool = True,
    ) -> list[CalendarEvent]:
        """Fetch events in an ISO-8601 range.

        Args:
            time_min: Lower bound (exclusive end time filter), RFC 3339.
            time_max: Upper bound (exclusive start time filter), RFC 3339.
            max_results: Maximum number of events returned.
            order_by: ``startTime`` (requires single_events) or ``updated``.
            single_events: Expand recurring events into instances.

        Returns:
            List of CalendarEvent in the requested order.
        """
        params: dict[str, Any] = {
            "timeMin": time_min,
            "timeMax": time_max,
            "maxResults": max_results,
            "singleEvents": "true" if single_events else "false",
            "orderBy": order_by,
        }
        data = await self._request("GET", self._events_path, params=params)

        events = [self._to_calendar_event(item) for item in data.get("items", [])]
        logger.info(
            "Fetched Google Calendar events",
            calendar=self.calendar_id,
            count=len(events),
            start=time_min,
            end=time_max,
        )
        return events

    async def delete(self, event_id: str) -> None:
        """Delete an event by ID.

        A 410 (already deleted) is treated as success.
        """
        path = f"{self._events_path}/{quote(event_id, safe='')}"
        try:
            await self._request("DELETE", path)
        except CalendarGatewayError as exc:
            if exc.status_code == 410:
                logger.info("Event already deleted", event_id=event_id)
                return
            raise
        logger.info("Deleted Google Calendar event", event_id=event_id, calendar=self.calendar_id)

    @property
    def is_connected(self) -> bool:
        """Check if a usable credential is held."""
        return self.session.is_connected
