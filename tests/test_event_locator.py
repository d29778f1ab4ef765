"""Tests for title matching within the search window."""

from __future__ import annotations

from datetime import datetime

import pytest

from fakes import FakeCalendar, fixed_clock
from gpal.agents.event_locator import EventLocator, pick_best_match
from gpal.models.schemas import CalendarEvent


def _event(id: str, summary: str, start: str = "2026-10-19T10:00:00-05:00") -> CalendarEvent:
    return CalendarEvent(id=id, summary=summary, start=start, end=start)


class TestPickBestMatch:
    def test_exact_beats_earlier_substring(self):
        events = [_event("weekly", "Team Sync Weekly"), _event("sync", "Team Sync")]
        assert pick_best_match("team sync", events).id == "sync"

    def test_substring_when_no_exact(self):
        events = [_event("weekly", "Team Sync Weekly"), _event("dentist", "Dentist")]
        assert pick_best_match("sync", events).id == "weekly"

    def test_first_in_tier_wins(self):
        events = [_event("a", "Standup"), _event("b", "Standup")]
        assert pick_best_match("standup", events).id == "a"

    def test_untitled_events_never_match_empty_query(self):
        events = [_event("blank", "")]
        assert pick_best_match("", events) is None
        assert pick_best_match("   ", events) is None

    def test_no_match(self):
        assert pick_best_match("yoga", [_event("a", "Dentist")]) is None


class TestEventLocator:
    @pytest.mark.parametrize("query", ["team sync", "  TEAM SYNC  ", "Team Sync"])
    async def test_exact_match_any_case(self, locator: EventLocator, query):
        assert await locator.find_best_match(query) == "sync"

    async def test_substring_match(self, locator: EventLocator):
        assert await locator.find_best_match("dent") == "dentist"

    async def test_absent_title(self, locator: EventLocator):
        assert await locator.find_best_match("yoga") is None

    async def test_empty_title_skips_gateway(self, locator: EventLocator, calendar: FakeCalendar):
        assert await locator.find_best_match("") is None
        assert calendar.calls == []

    async def test_events_outside_window_are_ignored(self):
        calendar = FakeCalendar(
            [
                _event("old", "Board Meeting", start="2026-08-01T10:00:00-05:00"),
                _event("far", "Board Meeting", start="2026-12-01T10:00:00-05:00"),
            ]
        )
        locator = EventLocator(calendar, clock=fixed_clock)
        assert await locator.find_best_match("board meeting") is None

    async def test_queries_bounded_window(self, locator: EventLocator, calendar: FakeCalendar):
        await locator.find_best_match("dentist")

        name, (time_min, time_max, max_results) = calendar.calls[0]
        assert name == "list"
        assert datetime.fromisoformat(time_min).isoformat() == "2026-10-11T20:00:00+00:00"
        assert datetime.fromisoformat(time_max).isoformat() == "2026-11-01T20:00:00+00:00"
        assert max_results == 50

    async def test_custom_window(self, calendar: FakeCalendar):
        locator = EventLocator(
            calendar, days_back=1, days_ahead=1, max_results=5, clock=fixed_clock
        )
        # Team Sync on the 20th is two days out
        assert await locator.find_best_match("team sync") == "sync-weekly"
        _, (_, _, max_results) = calendar.calls[0]
        assert max_results == 5
