"""Shared fixtures: a fixed clock, an in-memory calendar, and a canned oracle."""

from __future__ import annotations

import pytest

from fakes import CannedOracle, FakeCalendar, fixed_clock
from gpal.agents.event_locator import EventLocator
from gpal.core.assistant import CalendarAssistant
from gpal.core.time_resolver import TimeResolver
from gpal.models.schemas import CalendarEvent


@pytest.fixture
def resolver() -> TimeResolver:
    return TimeResolver(clock=fixed_clock)


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar(
        [
            CalendarEvent(
                id="sync-weekly",
                summary="Team Sync Weekly",
                start="2026-10-19T10:00:00-05:00",
                end="2026-10-19T11:00:00-05:00",
            ),
            CalendarEvent(
                id="sync",
                summary="Team Sync",
                start="2026-10-20T10:00:00-05:00",
                end="2026-10-20T11:00:00-05:00",
            ),
            CalendarEvent(
                id="dentist",
                summary="Dentist",
                start="2026-10-21T14:00:00-05:00",
                end="2026-10-21T15:00:00-05:00",
            ),
        ]
    )


@pytest.fixture
def locator(calendar: FakeCalendar) -> EventLocator:
    return EventLocator(calendar, clock=fixed_clock)


@pytest.fixture
def oracle() -> CannedOracle:
    return CannedOracle()


@pytest.fixture
def assistant(
    oracle: CannedOracle,
    calendar: FakeCalendar,
    resolver: TimeResolver,
    locator: EventLocator,
) -> CalendarAssistant:
    return CalendarAssistant.from_components(oracle, calendar, resolver=resolver, locator=locator)
