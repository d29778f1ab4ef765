"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gpal.core.config import GoogleCalendarSettings, MasterSettings, SchedulingSettings


def test_scheduling_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("GPAL_SCHEDULING_TIMEZONE", "GPAL_SCHEDULING_UTC_OFFSET"):
        monkeypatch.delenv(name, raising=False)
    settings = SchedulingSettings(_env_file=None)
    assert settings.timezone == "America/New_York"
    assert settings.utc_offset == "-05:00"
    assert settings.search_days_back == 7
    assert settings.search_days_ahead == 14
    assert settings.search_max_results == 50


def test_env_prefix(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GPAL_SCHEDULING_UTC_OFFSET", "+02:00")
    monkeypatch.setenv("GPAL_GOOGLE_ACCESS_TOKEN", "ya29.static")
    settings = MasterSettings.from_env()
    assert settings.scheduling.utc_offset == "+02:00"
    assert settings.google_calendar.has_static_token is True


@pytest.mark.parametrize("offset", ["5", "-5:00", "+0500", "EST"])
def test_offset_must_be_signed_hours_minutes(offset):
    with pytest.raises(ValidationError):
        SchedulingSettings(_env_file=None, utc_offset=offset)


def test_secrets_are_masked():
    settings = GoogleCalendarSettings(_env_file=None, access_token="ya29.secret")
    assert "ya29.secret" not in repr(settings)
