"""Shared Pydantic models for commands, events, and assistant replies."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Action(str, Enum):
    """Scheduling intents the oracle may emit."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    CHECK = "check"
    LIST = "list"
    MOVE = "move"
    NONE = "none"


class OutcomeStatus(str, Enum):
    """Terminal states of one handled request."""

    DONE = "done"
    NOT_FOUND = "not_found"
    FAILED = "failed"
    UNRECOGNIZED = "unrecognized"


class Command(BaseModel):
    """Structured scheduling intent parsed from a user utterance.

    Every text field uses ``""`` as the "unknown" sentinel.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    action: Action = Field(default=Action.NONE, description="Requested action")
    title: str = Field(default="", description="Title of the event to create")
    start: str = Field(default="", description="ISO start timestamp")
    end: str = Field(default="", description="ISO end timestamp")
    date: str = Field(default="", description="ISO date when no start time is known")
    details: str = Field(default="", description="Free-text event description")
    target_event: str = Field(
        default="", description="Title of an existing event to delete or move"
    )

    @field_validator("action", mode="before")
    @classmethod
    def coerce_action(cls, v: Any) -> Action:
        """Map anything outside the vocabulary to ``none``."""
        if isinstance(v, Action):
            return v
        if isinstance(v, str):
            try:
                return Action(v.strip().lower())
            except ValueError:
                return Action.NONE
        return Action.NONE

    @field_validator("title", "start", "end", "date", "details", "target_event", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        return str(v)


class EventTime(BaseModel):
    """Civil time with an explicit UTC offset, plus the zone name."""

    model_config = ConfigDict(populate_by_name=True)

    date_time: str = Field(..., alias="dateTime")
    time_zone: str = Field(..., alias="timeZone")


class ResolvedEvent(BaseModel):
    """Fully qualified event ready to be sent to the calendar."""

    summary: str
    description: str = ""
    start: EventTime
    end: EventTime

    def to_api_body(self) -> dict[str, Any]:
        """Render the Google Calendar ``events.insert`` request body."""
        return self.model_dump(by_alias=True)


class CalendarEvent(BaseModel):
    """Event as read back from the calendar."""

    id: str
    summary: str = ""
    start: str = ""
    end: str = ""
    description: str = ""


class Outcome(BaseModel):
    """Result of executing one command."""

    status: OutcomeStatus
    message: str
    event: Optional[dict[str, Any]] = None


class ChatReply(BaseModel):
    """Response returned for one user utterance."""

    reply: str
    command: Optional[Command] = None
    event: Optional[dict[str, Any]] = None
