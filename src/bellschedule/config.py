"""Bell schedule settings loaded from environment variables.

These are deployment settings (where the data lives, which timezone the
display runs in). The bell tables and class lists themselves live in the
schedule configuration document, see loaders.load_schedule_data().
"""

from datetime import datetime

from pydantic import Field
from pydantic_settings import BaseSettings


class BellScheduleSettings(BaseSettings):
    """Bell schedule settings loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Timezone every computation runs in (single-timezone audience)
    schedule_timezone: str = Field(
        default="America/Denver",
        description="IANA timezone of the school",
    )

    # Data sources
    schedule_data_path: str = Field(
        default="data/schedule-data.json",
        description="Path to the schedule configuration JSON document",
    )
    calendar_source: str = Field(
        default="data/calendar.ics",
        description="Path or http(s) URL of the school's iCalendar feed (empty disables)",
    )
    calendar_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout when fetching the calendar feed",
    )
    calendar_fetch_attempts: int = Field(
        default=3,
        description="Attempts for transient calendar fetch failures",
    )

    # Rotation rules
    reduced_weekday: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Weekday using the reduced bell table (0=Monday, 2=Wednesday)",
    )
    a_day_title: str = Field(
        default="A Day",
        description="Calendar event title that marks an A day",
    )
    b_day_title: str = Field(
        default="B Day",
        description="Calendar event title that marks a B day",
    )

    # Simulated current instant for testing and manual inspection
    simulated_now: datetime | None = Field(
        default=None,
        description="Use this instant instead of the wall clock",
    )

    # Viewer
    refresh_seconds: float = Field(
        default=1.0,
        description="Polling cadence of the --watch viewer",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for unattended displays)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def sentinel_titles(self) -> tuple[str, str]:
        return (self.a_day_title, self.b_day_title)


# Singleton pattern
_config: BellScheduleSettings | None = None


def get_config() -> BellScheduleSettings:
    """Get the bell schedule settings singleton.

    Returns:
        BellScheduleSettings: Settings instance
    """
    global _config
    if _config is None:
        _config = BellScheduleSettings()
    return _config
