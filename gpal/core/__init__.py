"""G-Pal core module - configuration, errors, time resolution and the request facade."""

from gpal.core.config import (
    GoogleCalendarSettings,
    MasterSettings,
    OpenAISettings,
    SchedulingSettings,
    Settings,
    SystemSettings,
)
from gpal.core.errors import (
    CalendarError,
    CalendarGatewayError,
    CalendarNotConnectedError,
    GPalError,
    InvalidTimeError,
    MissingTimeError,
    OracleError,
    OracleFormatError,
    TimeResolutionError,
)

__all__ = [
    # Configuration
    "SystemSettings",
    "OpenAISettings",
    "GoogleCalendarSettings",
    "SchedulingSettings",
    "MasterSettings",
    "Settings",
    # Errors
    "GPalError",
    "OracleError",
    "OracleFormatError",
    "TimeResolutionError",
    "MissingTimeError",
    "InvalidTimeError",
    "CalendarError",
    "CalendarNotConnectedError",
    "CalendarGatewayError",
]
