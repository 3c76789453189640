"""Load the schedule configuration document and the calendar feed.

Both loads happen once at startup. Neither failure stops the display: a bad
configuration falls back to ScheduleData.empty() ("no data"), a bad calendar
falls back to empty CalendarData (computed rotation, no events).
"""

import json
from datetime import tzinfo
from pathlib import Path

import requests
from pydantic import ValidationError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from bellschedule.calendar_import import (
    DEFAULT_A_DAY_TITLE,
    DEFAULT_B_DAY_TITLE,
    parse_calendar,
)
from bellschedule.errors import (
    CalendarFetchError,
    ConfigLoadError,
    PermanentFetchError,
    TransientFetchError,
)
from bellschedule.logging import get_logger
from bellschedule.models import CalendarData, ScheduleData

log = get_logger(__name__)

FETCH_ATTEMPTS = 3
FETCH_WAIT_SECONDS = 2


def read_schedule_data(path: str | Path) -> ScheduleData:
    """Read and validate the schedule configuration document.

    Raises:
        ConfigLoadError: If the file is missing, not JSON, or fails validation.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigLoadError(f"Cannot read schedule data {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Schedule data {path} is not valid JSON: {e}") from e

    try:
        return ScheduleData.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(f"Schedule data {path} is invalid: {e}") from e


def load_schedule_data(path: str | Path) -> tuple[ScheduleData, str | None]:
    """Load the schedule configuration, falling back to an empty one.

    Returns:
        (data, error) where error is None on success.
    """
    try:
        data = read_schedule_data(path)
    except ConfigLoadError as e:
        log.error("schedule_data_load_failed", path=str(path), error=str(e))
        return ScheduleData.empty(), str(e)

    log.info(
        "schedule_data_loaded",
        path=str(path),
        off_days=len(data.off_days),
        standard_rows=len(data.schedules.standard),
        reduced_rows=len(data.schedules.reduced),
    )
    return data, None


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _log_retry(retry_state: RetryCallState) -> None:
    log.warning(
        "calendar_fetch_retry",
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()),
    )


@retry(
    stop=stop_after_attempt(FETCH_ATTEMPTS),
    wait=wait_fixed(FETCH_WAIT_SECONDS),
    retry=retry_if_exception_type(TransientFetchError),
    before_sleep=_log_retry,
    reraise=True,
)
def fetch_calendar_text(url: str, timeout: float = 10.0) -> str:
    """Download the calendar feed.

    Retries on TransientFetchError but fails fast on PermanentFetchError.

    Raises:
        TransientFetchError: Timeouts, connection errors, 5xx responses.
        PermanentFetchError: 4xx responses, malformed URLs.
    """
    log.info("calendar_fetch_started", url=url)
    try:
        resp = requests.get(url, timeout=timeout)
    except (requests.Timeout, requests.ConnectionError) as e:
        log.warning("calendar_fetch_transient", url=url, error=str(e))
        raise TransientFetchError(f"Calendar fetch failed: {e}") from e
    except requests.RequestException as e:
        log.error("calendar_fetch_error", url=url, error=str(e), type=type(e).__name__)
        raise PermanentFetchError(f"Calendar fetch failed: {e}") from e

    if resp.status_code >= 500:
        log.warning("calendar_fetch_transient", url=url, status=resp.status_code)
        raise TransientFetchError(f"Calendar host returned {resp.status_code}")
    if resp.status_code >= 400:
        log.error("calendar_fetch_rejected", url=url, status=resp.status_code)
        raise PermanentFetchError(f"Calendar host returned {resp.status_code}")

    # Feeds often omit the charset; iCalendar content is UTF-8
    return resp.content.decode("utf-8", errors="replace")


def read_calendar_text(
    source: str, timeout: float = 10.0, attempts: int = FETCH_ATTEMPTS
) -> str:
    """Calendar feed text from an http(s) URL or a local file path."""
    if is_url(source):
        fetch = fetch_calendar_text.retry_with(stop=stop_after_attempt(attempts))
        return fetch(source, timeout=timeout)
    path = Path(source)
    try:
        # Same decoding as a downloaded feed; a stray Latin-1 byte is not fatal
        return path.read_bytes().decode("utf-8", errors="replace")
    except FileNotFoundError as e:
        raise PermanentFetchError(f"Calendar file not found: {path}") from e
    except OSError as e:
        raise PermanentFetchError(f"Cannot read calendar file {path}: {e}") from e


def load_calendar(
    source: str,
    tz: tzinfo,
    *,
    timeout: float = 10.0,
    attempts: int = FETCH_ATTEMPTS,
    a_day_title: str = DEFAULT_A_DAY_TITLE,
    b_day_title: str = DEFAULT_B_DAY_TITLE,
) -> CalendarData:
    """Fetch and import the calendar feed; never raises.

    An empty `source` means no calendar is configured.
    """
    if not source:
        log.info("calendar_disabled")
        return CalendarData()

    try:
        text = read_calendar_text(source, timeout=timeout, attempts=attempts)
    except CalendarFetchError as e:
        log.error("calendar_load_failed", source=source, error=str(e))
        return CalendarData(error=str(e))

    return parse_calendar(
        text, tz, a_day_title=a_day_title, b_day_title=b_day_title
    )
