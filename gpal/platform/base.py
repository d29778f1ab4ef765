"""Calendar gateway interface consumed by the action executor."""

from abc import ABC, abstractmethod
from typing import Any

from gpal.models.schemas import CalendarEvent, ResolvedEvent


class CalendarGateway(ABC):
    """Create/list/delete primitives against a remote calendar.

    Every call needs an established credential and raises
    ``CalendarNotConnectedError`` without one. Other remote failures raise
    ``CalendarGatewayError``.
    """

    @abstractmethod
    async def create(self, event: ResolvedEvent) -> dict[str, Any]:
        """Create an event and return the stored resource (id, summary, start, end)."""

    @abstractmethod
    async def list_events(
        self,
        time_min: str,
        time_max: str,
        max_results: int,
        order_by: str = "startTime",
        single_events: bool = True,
    ) -> list[CalendarEvent]:
        """List events overlapping ``[time_min, time_max)`` in the given order."""

    @abstractmethod
    async def delete(self, event_id: str) -> None:
        """Delete an event by id."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True iff a usable credential is currently held."""
