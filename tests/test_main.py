"""Tests for the HTTP surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fakes import CannedOracle, FakeCalendar
from gpal.core.assistant import CalendarAssistant
from gpal.core.config import MasterSettings, SystemSettings
from gpal.main import create_app


@pytest.fixture
def client(assistant: CalendarAssistant):
    with TestClient(create_app(assistant)) as test_client:
        yield test_client


def test_chat_add(client: TestClient, oracle: CannedOracle):
    oracle.response = '{"action": "add", "title": "Gym", "date": "2026-10-21"}'

    resp = client.post("/chat", json={"message": "gym on wednesday"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["reply"] == 'Created event "Gym" on 2026-10-21T09:00:00-05:00.'
    assert body["command"]["action"] == "add"
    assert body["command"]["target_event"] == ""
    assert body["event"]["end"]["dateTime"] == "2026-10-21T10:00:00-05:00"


def test_chat_unparseable_is_500(client: TestClient, oracle: CannedOracle):
    oracle.response = "not json"

    resp = client.post("/chat", json={"message": "???"})

    assert resp.status_code == 500
    assert resp.json()["reply"] == "I couldn't understand that request. Please rephrase."


def test_chat_requires_message(client: TestClient, oracle: CannedOracle):
    resp = client.post("/chat", json={"message": "   "})

    assert resp.status_code == 400
    assert oracle.prompts == []


def test_auth_status(client: TestClient, calendar: FakeCalendar):
    assert client.get("/auth/status").json() == {"connected": True}
    calendar.connected = False
    assert client.get("/auth/status").json() == {"connected": False}


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_title_and_debug_come_from_settings(assistant: CalendarAssistant):
    settings = MasterSettings(system=SystemSettings(system_name="Desk Pal", debug=True))

    app = create_app(assistant, settings=settings)

    assert app.title == "Desk Pal"
    assert app.debug is True
    with TestClient(app) as test_client:
        assert test_client.get("/health").json()["status"] == "ok"
