"""Dispatch a parsed command to calendar operations.

Each request ends in one of four outcomes: done, not_found, failed, or
unrecognized. Messages shown to the user come only from the constants below;
collaborator errors are logged and never echoed.
"""

from typing import Any

import structlog

from gpal.agents.event_locator import EventLocator
from gpal.core.errors import CalendarNotConnectedError
from gpal.core.time_resolver import TimeResolver
from gpal.models.schemas import Action, Command, Outcome, OutcomeStatus
from gpal.platform.base import CalendarGateway

logger = structlog.get_logger(__name__)

CREATED = 'Created event "{summary}" on {start}.'
CREATE_FAILED = (
    "I understood your request but couldn't create the event. Is Google Calendar connected?"
)
NOT_FOUND = 'I couldn\'t find an event named "{target}".'
DELETED = 'Deleted event "{target}".'
DELETE_FAILED = "I understood the delete request but couldn't remove the event."
MOVED = 'Moved "{target}" to {start}.'
MOVE_FAILED = "I understood the move request but couldn't move the event."
NOT_CONNECTED = (
    "I understood the {action} request but Google Calendar isn't connected. "
    "Please reconnect it and try again."
)
UNRECOGNIZED = "I don't understand the request."


def _display_start(event: dict[str, Any]) -> str:
    start = event.get("start") or {}
    return start.get("dateTime") or start.get("date") or ""


class ActionExecutor:
    """Runs create / delete / move against the calendar for one command."""

    def __init__(
        self,
        gateway: CalendarGateway,
        locator: EventLocator,
        resolver: TimeResolver,
    ) -> None:
        self.gateway = gateway
        self.locator = locator
        self.resolver = resolver

    async def execute(self, command: Command) -> Outcome:
        """Execute ``command`` and describe the result."""
        if command.action is Action.ADD:
            return await self._add(command)
        if command.action is Action.DELETE:
            return await self._delete(command)
        if command.action is Action.MOVE:
            return await self._move(command)

        logger.info("Action not handled", action=command.action.value)
        return Outcome(status=OutcomeStatus.UNRECOGNIZED, message=UNRECOGNIZED)

    async def _add(self, command: Command) -> Outcome:
        try:
            event = self.resolver.build_event(command)
            created = await self.gateway.create(event)
        except Exception:
            logger.error("Failed to create event", title=command.title, exc_info=True)
            return Outcome(status=OutcomeStatus.FAILED, message=CREATE_FAILED)

        return Outcome(
            status=OutcomeStatus.DONE,
            message=CREATED.format(
                summary=created.get("summary", event.summary),
                start=_display_start(created),
            ),
            event=created,
        )

    async def _delete(self, command: Command) -> Outcome:
        target = command.target_event
        try:
            event_id = await self.locator.find_best_match(target)
            if event_id is None:
                return Outcome(
                    status=OutcomeStatus.NOT_FOUND, message=NOT_FOUND.format(target=target)
                )
            await self.gateway.delete(event_id)
        except CalendarNotConnectedError:
            logger.warning("Delete attempted without calendar connection", target=target)
            return Outcome(
                status=OutcomeStatus.FAILED, message=NOT_CONNECTED.format(action="delete")
            )
        except Exception:
            logger.error("Failed to delete event", target=target, exc_info=True)
            return Outcome(status=OutcomeStatus.FAILED, message=DELETE_FAILED)

        return Outcome(status=OutcomeStatus.DONE, message=DELETED.format(target=target))

    async def _move(self, command: Command) -> Outcome:
        target = command.target_event
        deleted_id = None
        try:
            event_id = await self.locator.find_best_match(target)
            if event_id is None:
                return Outcome(
                    status=OutcomeStatus.NOT_FOUND, message=NOT_FOUND.format(target=target)
                )

            event = self.resolver.build_event(command)

            # The old event stays deleted if the create below fails.
            await self.gateway.delete(event_id)
            deleted_id = event_id
            created = await self.gateway.create(event)
        except CalendarNotConnectedError:
            logger.warning(
                "Move attempted without calendar connection",
                target=target,
                deleted_event_id=deleted_id,
            )
            return Outcome(
                status=OutcomeStatus.FAILED, message=NOT_CONNECTED.format(action="move")
            )
        except Exception:
            if deleted_id is not None:
                logger.error(
                    "Move partially applied: old event deleted, new event not created",
                    target=target,
                    deleted_event_id=deleted_id,
                    exc_info=True,
                )
            else:
                logger.error("Failed to move event", target=target, exc_info=True)
            return Outcome(status=OutcomeStatus.FAILED, message=MOVE_FAILED)

        return Outcome(
            status=OutcomeStatus.DONE,
            message=MOVED.format(target=target, start=_display_start(created)),
            event=created,
        )
