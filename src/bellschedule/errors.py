"""Error hierarchy for loading schedule configuration and calendar feeds.

Only the I/O layer raises these. The engine itself never raises for a lookup
miss: no period, no class info and no events are ordinary results.

Transient fetch failures are retried by tenacity:
    @retry(retry=retry_if_exception_type(TransientFetchError), stop=stop_after_attempt(3))
    def fetch_calendar_text(url: str, timeout: float) -> str:
        ...
"""


class ScheduleError(Exception):
    """Base exception for all bell schedule errors."""

    pass


class ConfigLoadError(ScheduleError):
    """Schedule configuration document is missing, unreadable or invalid.

    Callers that want the empty-configuration fallback use
    loaders.load_schedule_data(), which catches this.
    """

    pass


class CalendarError(ScheduleError):
    """Base exception for calendar feed problems."""

    pass


class CalendarFetchError(CalendarError):
    """Calendar feed text could not be retrieved."""

    pass


class TransientFetchError(CalendarFetchError):
    """Temporary failure that may succeed on retry.

    Examples: connection reset, read timeout, 502/503 from the feed host.
    """

    pass


class PermanentFetchError(CalendarFetchError):
    """Failure that won't succeed on retry.

    Examples: 404 for the feed URL, local feed file does not exist.
    """

    pass
