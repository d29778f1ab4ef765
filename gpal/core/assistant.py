"""Request-level facade: utterance in, chat reply out."""

from typing import Optional

import structlog

from gpal.agents.event_locator import EventLocator
from gpal.agents.executor import ActionExecutor
from gpal.agents.intent_parser import IntentParser
from gpal.bridges.google_session import CalendarSession
from gpal.core.config import MasterSettings
from gpal.core.errors import OracleError, OracleFormatError
from gpal.core.time_resolver import TimeResolver
from gpal.models.base import TextOracle
from gpal.models.openai_client import OpenAIClient
from gpal.models.schemas import ChatReply
from gpal.platform.base import CalendarGateway
from gpal.platform.google_calendar import GoogleCalendarGateway

logger = structlog.get_logger(__name__)

UNPARSEABLE_REPLY = "I couldn't understand that request. Please rephrase."
ORACLE_FAILED_REPLY = "Error processing AI request."


class CalendarAssistant:
    """Parses an utterance into a command and executes it.

    Each call to :meth:`handle` awaits the oracle and then the calendar calls
    strictly one after another.
    """

    def __init__(
        self,
        parser: IntentParser,
        executor: ActionExecutor,
        resolver: TimeResolver,
        gateway: CalendarGateway,
    ) -> None:
        self.parser = parser
        self.executor = executor
        self.resolver = resolver
        self.gateway = gateway

    @classmethod
    def from_components(
        cls,
        oracle: TextOracle,
        gateway: CalendarGateway,
        resolver: Optional[TimeResolver] = None,
        locator: Optional[EventLocator] = None,
    ) -> "CalendarAssistant":
        """Wire an assistant from an oracle and a gateway with default settings."""
        resolver = resolver or TimeResolver()
        locator = locator or EventLocator(gateway)
        return cls(
            parser=IntentParser(oracle),
            executor=ActionExecutor(gateway, locator, resolver),
            resolver=resolver,
            gateway=gateway,
        )

    @classmethod
    def from_settings(
        cls,
        settings: MasterSettings,
        session: Optional[CalendarSession] = None,
    ) -> "CalendarAssistant":
        """Build the production assistant (OpenAI + Google Calendar)."""
        scheduling = settings.scheduling
        google = settings.google_calendar

        if session is None:
            session = CalendarSession.from_static_token(google.access_token.get_secret_value())

        oracle = OpenAIClient(
            api_key=settings.openai.api_key.get_secret_value(),
            model=settings.openai.default_model,
            base_url=settings.openai.base_url,
            timeout_seconds=settings.openai.timeout_seconds,
        )
        gateway = GoogleCalendarGateway(
            session,
            calendar_id=google.calendar_id,
            timeout_seconds=google.timeout_seconds,
        )
        resolver = TimeResolver(
            timezone_name=scheduling.timezone,
            utc_offset=scheduling.utc_offset,
            default_start_hour=scheduling.default_start_hour,
            default_duration_minutes=scheduling.default_duration_minutes,
        )
        locator = EventLocator(
            gateway,
            days_back=scheduling.search_days_back,
            days_ahead=scheduling.search_days_ahead,
            max_results=scheduling.search_max_results,
        )
        return cls.from_components(oracle, gateway, resolver=resolver, locator=locator)

    def is_connected(self) -> bool:
        """True iff the calendar credential is usable."""
        return self.gateway.is_connected

    async def handle(self, utterance: str) -> ChatReply:
        """Handle one user message end to end.

        Oracle failures end the request before any calendar call; the
        returned reply then carries no command.
        """
        try:
            command = await self.parser.parse(
                utterance,
                today=self.resolver.today(),
                now=self.resolver.current_time(),
            )
        except OracleFormatError as exc:
            logger.error(
                "Failed to parse oracle output",
                error=str(exc),
                raw_output=exc.raw_output,
            )
            return ChatReply(reply=UNPARSEABLE_REPLY)
        except OracleError:
            logger.error("Oracle request failed", exc_info=True)
            return ChatReply(reply=ORACLE_FAILED_REPLY)

        outcome = await self.executor.execute(command)
        logger.info(
            "Request handled",
            action=command.action.value,
            status=outcome.status.value,
        )
        return ChatReply(reply=outcome.message, command=command, event=outcome.event)

    async def close(self) -> None:
        """Release the oracle's connections."""
        await self.parser.oracle.close()
