"""Exception hierarchy shared by the assistant components."""

from typing import Optional


class GPalError(Exception):
    """Base class for all G-Pal errors."""


class OracleError(GPalError):
    """The text-generation service could not be reached or rejected the call."""


class OracleFormatError(OracleError):
    """The oracle answered, but not with a single JSON object."""

    def __init__(self, message: str, raw_output: str = "") -> None:
        super().__init__(message)
        self.raw_output = raw_output


class TimeResolutionError(GPalError):
    """A command's date/time fields could not be turned into instants."""


class MissingTimeError(TimeResolutionError):
    """Neither a start timestamp nor a date was supplied."""


class InvalidTimeError(TimeResolutionError):
    """A timestamp could not be parsed, or the range is empty."""


class CalendarError(GPalError):
    """Base class for calendar gateway failures."""


class CalendarNotConnectedError(CalendarError):
    """No usable calendar credential is held."""


class CalendarGatewayError(CalendarError):
    """A calendar API call failed (network, permission, quota, ...)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        self.message = message
        detail = f"{status_code}: {message}" if status_code is not None else message
        super().__init__(detail)
