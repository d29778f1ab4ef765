"""Translate a user utterance into a :class:`Command` via the text oracle."""

import json
import re

import structlog

from gpal.agents.prompts import build_intent_prompt
from gpal.core.errors import OracleFormatError
from gpal.models.base import TextOracle
from gpal.models.schemas import Command

logger = structlog.get_logger(__name__)

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def extract_command(output: str) -> Command:
    """Parse the oracle's raw output into a Command.

    The whole response must be one JSON object, optionally wrapped in a
    Markdown code fence.

    Raises:
        OracleFormatError: If the output is not a JSON object.
    """
    text = (output or "").strip()
    fenced = _CODE_FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OracleFormatError(f"Oracle output is not JSON: {exc}", raw_output=output) from exc

    if not isinstance(data, dict):
        raise OracleFormatError(
            f"Oracle output is JSON {type(data).__name__}, expected an object",
            raw_output=output,
        )
    return Command.model_validate(data)


class IntentParser:
    """Builds the instruction prompt and parses the oracle's JSON answer."""

    def __init__(self, oracle: TextOracle) -> None:
        self.oracle = oracle

    async def parse(self, utterance: str, today: str, now: str = "") -> Command:
        """Derive a Command from ``utterance``.

        Args:
            utterance: Free-text user message.
            today: Current local date (``YYYY-MM-DD``).
            now: Current local time (``HH:MM``), used for the elapsed-time rule.

        Raises:
            OracleError: If the oracle call fails.
            OracleFormatError: If the answer is not a JSON object.
        """
        prompt = build_intent_prompt(utterance, today=today, now=now)
        output = await self.oracle.complete(prompt)
        logger.debug("Raw oracle output", output=output)

        command = extract_command(output)
        logger.info(
            "Parsed command",
            action=command.action.value,
            title=command.title,
            target_event=command.target_event,
        )
        return command
