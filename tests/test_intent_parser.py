"""Tests for prompt construction and oracle output parsing."""

from __future__ import annotations

import json

import pytest

from fakes import CannedOracle
from gpal.agents.intent_parser import IntentParser, extract_command
from gpal.agents.prompts import COMMAND_FIELDS, build_intent_prompt
from gpal.core.errors import OracleFormatError
from gpal.models.schemas import Action, Command


class TestPrompt:
    def test_embeds_date_message_and_vocabulary(self):
        prompt = build_intent_prompt("lunch with Ana tomorrow at 1", today="2026-10-18")
        assert "Today's date is: 2026-10-18" in prompt
        assert 'Message: "lunch with Ana tomorrow at 1"' in prompt
        for action in Action:
            assert f'"{action.value}"' in prompt
        for field in COMMAND_FIELDS:
            assert f'"{field}": ""' in prompt

    def test_states_elapsed_time_rule(self):
        prompt = build_intent_prompt("at 11", today="2026-10-18")
        assert "If the time HAS passed, use TOMORROW." in prompt
        assert "Never return a time without a date." in prompt

    def test_current_time_only_when_given(self):
        assert "current local time" not in build_intent_prompt("x", today="2026-10-18")
        prompt = build_intent_prompt("x", today="2026-10-18", now="15:00")
        assert "The current local time is: 15:00" in prompt

    def test_braces_in_message_are_kept(self):
        prompt = build_intent_prompt("add {weird} event", today="2026-10-18")
        assert "add {weird} event" in prompt


class TestExtractCommand:
    def test_full_object(self):
        command = extract_command(
            json.dumps(
                {
                    "action": "add",
                    "title": "Dentist",
                    "start": "2026-10-20T11:00",
                    "end": "",
                    "date": "2026-10-20",
                    "details": "",
                    "target_event": "",
                }
            )
        )
        assert command.action is Action.ADD
        assert command.title == "Dentist"
        assert command.start == "2026-10-20T11:00"

    def test_missing_fields_default_to_empty(self):
        command = extract_command('{"action": "delete", "target_event": "Dentist"}')
        assert command.title == ""
        assert command.start == ""
        assert command.target_event == "Dentist"

    @pytest.mark.parametrize("action", ["reschedule", "", 7, None])
    def test_unknown_action_becomes_none(self, action):
        command = extract_command(json.dumps({"action": action}))
        assert command.action is Action.NONE

    def test_action_is_case_insensitive(self):
        assert extract_command('{"action": " MOVE "}').action is Action.MOVE

    def test_null_and_numbers_coerced_to_text(self):
        command = extract_command('{"action": "add", "title": null, "details": 42}')
        assert command.title == ""
        assert command.details == "42"

    def test_code_fence_is_unwrapped(self):
        command = extract_command('```json\n{"action": "list"}\n```')
        assert command.action is Action.LIST

    @pytest.mark.parametrize(
        "output",
        ["not json", "", '{"action": "add",}', '["add"]', "Sure! {\"action\": \"add\"}"],
    )
    def test_malformed_output_raises(self, output):
        with pytest.raises(OracleFormatError) as exc_info:
            extract_command(output)
        assert exc_info.value.raw_output == output

    def test_command_is_immutable(self):
        command = extract_command('{"action": "add"}')
        with pytest.raises(Exception):
            command.title = "changed"


class TestIntentParser:
    async def test_sends_prompt_and_returns_command(self):
        oracle = CannedOracle('{"action": "add", "title": "Gym", "start": "2026-10-19T07:00"}')
        parser = IntentParser(oracle)

        command = await parser.parse("gym tomorrow at 7", today="2026-10-18", now="15:00")

        assert command == Command(action=Action.ADD, title="Gym", start="2026-10-19T07:00")
        assert len(oracle.prompts) == 1
        assert "gym tomorrow at 7" in oracle.prompts[0]
        assert "The current local time is: 15:00" in oracle.prompts[0]

    async def test_malformed_output_is_not_retried(self):
        oracle = CannedOracle("not json")
        parser = IntentParser(oracle)

        with pytest.raises(OracleFormatError):
            await parser.parse("hello", today="2026-10-18")
        assert len(oracle.prompts) == 1
