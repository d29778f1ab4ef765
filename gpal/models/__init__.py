"""Models package for commands, calendar events and the text oracle."""

from gpal.models.base import TextOracle
from gpal.models.schemas import (
    Action,
    CalendarEvent,
    ChatReply,
    Command,
    EventTime,
    Outcome,
    OutcomeStatus,
    ResolvedEvent,
)

__all__ = [
    "TextOracle",
    "Action",
    "Command",
    "EventTime",
    "ResolvedEvent",
    "CalendarEvent",
    "Outcome",
    "OutcomeStatus",
    "ChatReply",
]
