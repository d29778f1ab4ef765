"""Find the calendar event a free-text title refers to."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import structlog

from gpal.models.schemas import CalendarEvent
from gpal.platform.base import CalendarGateway

logger = structlog.get_logger(__name__)


def _clean(text: str) -> str:
    return (text or "").strip().lower()


def pick_best_match(title: str, events: list[CalendarEvent]) -> Optional[CalendarEvent]:
    """Choose the best event for ``title`` from chronologically ordered events.

    An exact (case-insensitive, trimmed) title match beats a substring match;
    within a tier the earliest event wins.
    """
    target = _clean(title)
    if not target:
        return None

    for event in events:
        if _clean(event.summary) == target:
            return event
    for event in events:
        if target in _clean(event.summary):
            return event
    return None


class EventLocator:
    """Searches a bounded window around now for an event by title.

    Args:
        gateway: Calendar to search.
        days_back: Days before now included in the search.
        days_ahead: Days after now included in the search.
        max_results: Cap on fetched events.
        clock: Returns the current aware datetime.
    """

    def __init__(
        self,
        gateway: CalendarGateway,
        days_back: int = 7,
        days_ahead: int = 14,
        max_results: int = 50,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.gateway = gateway
        self.days_back = days_back
        self.days_ahead = days_ahead
        self.max_results = max_results
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def search_window(self) -> tuple[str, str]:
        """RFC 3339 ``(time_min, time_max)`` of the current search window."""
        now = self._clock().astimezone(timezone.utc)
        time_min = now - timedelta(days=self.days_back)
        time_max = now + timedelta(days=self.days_ahead)
        return time_min.isoformat(), time_max.isoformat()

    async def find_best_match(self, title: str) -> Optional[str]:
        """Return the id of the event best matching ``title``, or None."""
        if not _clean(title):
            return None

        time_min, time_max = self.search_window()
        events = await self.gateway.list_events(
            time_min,
            time_max,
            max_results=self.max_results,
            order_by="startTime",
            single_events=True,
        )

        match = pick_best_match(title, events)
        if match is None:
            logger.debug(
                "No event matched title",
                title=title,
                searched=[event.summary for event in events],
            )
            return None

        logger.info("Matched event", title=title, event_id=match.id, summary=match.summary)
        return match.id
