"""Turn partial ISO date/time strings into offset-anchored timestamps.

All local times are anchored to one fixed UTC offset taken from
configuration. Daylight-saving transitions are not modelled: an event in
summer gets the same offset as one in winter.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

import structlog

from gpal.core.errors import InvalidTimeError, MissingTimeError
from gpal.models.schemas import Command, EventTime, ResolvedEvent

logger = structlog.get_logger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_OF_DAY_RE = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")
_MINUTES_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$")
_OFFSET_SUFFIX_RE = re.compile(r"([+-]\d{2}:\d{2}|Z)$")

DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_UTC_OFFSET = "-05:00"
UNTITLED_EVENT = "Untitled event"


def _parse_offset(offset: str) -> timezone:
    sign = -1 if offset.startswith("-") else 1
    hours, minutes = offset[1:].split(":")
    return timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))


class TimeResolver:
    """Normalizes command timestamps and fills in missing start/end values.

    Args:
        timezone_name: IANA zone name reported to the calendar.
        utc_offset: Fixed ``±HH:MM`` offset used for every local time.
        default_start_hour: Start hour when only a date is known.
        default_duration_minutes: Event length when no end is given.
        clock: Returns the current aware datetime; defaults to the system clock.
    """

    def __init__(
        self,
        timezone_name: str = DEFAULT_TIMEZONE,
        utc_offset: str = DEFAULT_UTC_OFFSET,
        default_start_hour: int = 9,
        default_duration_minutes: int = 60,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.timezone_name = timezone_name
        self.utc_offset = utc_offset
        self.tzinfo = _parse_offset(utc_offset)
        self.default_start_hour = default_start_hour
        self.default_duration = timedelta(minutes=default_duration_minutes)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ── Reference instant ─────────────────────────────────────────

    def now(self) -> datetime:
        """Current instant expressed in the configured offset."""
        return self._clock().astimezone(self.tzinfo)

    def today(self) -> str:
        """Current local date as ``YYYY-MM-DD``."""
        return self.now().date().isoformat()

    def current_time(self) -> str:
        """Current local time as ``HH:MM``."""
        return self.now().strftime("%H:%M")

    # ── Normalization ─────────────────────────────────────────────

    def normalize(self, raw: Optional[str]) -> Optional[str]:
        """Return ``raw`` with seconds and a UTC offset guaranteed.

        Empty values are returned unchanged so the caller can pick a default.
        Already complete timestamps pass through untouched.
        """
        if not raw:
            return raw
        ts = raw.strip()
        if _MINUTES_ONLY_RE.match(ts):
            ts += ":00"
        if not _OFFSET_SUFFIX_RE.search(ts):
            ts += self.utc_offset
        return ts

    def _parse(self, ts: str) -> datetime:
        try:
            # fromisoformat only accepts a trailing "Z" from 3.11 on
            return datetime.fromisoformat(ts.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidTimeError(f"Unparseable timestamp: {ts!r}") from exc

    def _default_start(self, day: str) -> str:
        try:
            parsed = date.fromisoformat(day.strip())
        except ValueError as exc:
            raise InvalidTimeError(f"Unparseable date: {day!r}") from exc
        return f"{parsed.isoformat()}T{self.default_start_hour:02d}:00:00{self.utc_offset}"

    # ── Command resolution ────────────────────────────────────────

    def resolve(self, command: Command) -> tuple[str, str]:
        """Derive normalized ``(start, end)`` timestamps for a command.

        Raises:
            MissingTimeError: If neither a start nor a date is present.
            InvalidTimeError: If a value cannot be parsed or end <= start.
        """
        start = command.start.strip()
        end = command.end.strip()
        day = command.date.strip()

        if _DATE_RE.match(start):
            day, start = start, ""
        elif _TIME_OF_DAY_RE.match(start):
            if not day:
                raise MissingTimeError(f"Start time {start!r} has no date")
            start = f"{day}T{start}"

        if not start:
            if not day:
                raise MissingTimeError("Command has neither a start time nor a date")
            start = self._default_start(day)

        start = self.normalize(start)
        start_dt = self._parse(start)

        if _TIME_OF_DAY_RE.match(end):
            end = f"{start_dt.date().isoformat()}T{end}"

        if end:
            end = self.normalize(end)
            end_dt = self._parse(end)
        else:
            end_dt = start_dt + self.default_duration
            end = end_dt.isoformat(timespec="seconds")

        if end_dt <= start_dt:
            raise InvalidTimeError(f"End {end!r} is not after start {start!r}")

        logger.debug("Resolved event times", start=start, end=end)
        return start, end

    def build_event(self, command: Command) -> ResolvedEvent:
        """Build the calendar payload for an add/move command."""
        start, end = self.resolve(command)
        return ResolvedEvent(
            summary=command.title.strip() or UNTITLED_EVENT,
            description=command.details,
            start=EventTime(dateTime=start, timeZone=self.timezone_name),
            end=EventTime(dateTime=end, timeZone=self.timezone_name),
        )
