"""Show today's bell schedule, rotation day and calendar events.

Standalone CLI for a terminal or a wall-mounted screen. Loads the schedule
configuration and calendar feed once, then renders the day view once or on a
fixed cadence.

Run with: python scripts/show_schedule.py
Watch:    python scripts/show_schedule.py --watch
Simulate: python scripts/show_schedule.py --now 2025-09-02T07:50
JSON:     python scripts/show_schedule.py --json --now 2025-09-03T08:40
Sources:  python scripts/show_schedule.py --data data/schedule-data.json \
              --calendar https://example.org/calendar.ics

Environment (or .env): SCHEDULE_TIMEZONE, SCHEDULE_DATA_PATH, CALENDAR_SOURCE,
REDUCED_WEEKDAY, SIMULATED_NOW, REFRESH_SECONDS, LOG_JSON, LOG_LEVEL.

Exit codes:
  0 = success (view on stdout)
  1 = error (message on stderr)
"""

import argparse
import os
import sys
import time
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

# Add src/ to path when running from a checkout without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from bellschedule.board import build_day_view  # noqa: E402
from bellschedule.clock import resolve_now, school_timezone  # noqa: E402
from bellschedule.config import get_config  # noqa: E402
from bellschedule.events import visible_events  # noqa: E402
from bellschedule.formatting import (  # noqa: E402
    clock_time,
    event_time_text,
    human_duration,
    long_date,
    status_line,
    teacher_last,
)
from bellschedule.loaders import load_calendar, load_schedule_data  # noqa: E402
from bellschedule.logging import get_logger, setup_logging  # noqa: E402
from bellschedule.models import DayView  # noqa: E402

log = get_logger(__name__)


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Show today's bell schedule and calendar events.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Schedule configuration JSON (default: SCHEDULE_DATA_PATH).",
    )
    parser.add_argument(
        "--calendar",
        type=str,
        default=None,
        help="Calendar feed path or URL; empty string disables (default: CALENDAR_SOURCE).",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Simulated current instant, e.g. 2025-09-02T07:50 (school-local if no offset).",
    )

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the day view as JSON instead of text.",
    )
    output_group.add_argument(
        "--watch",
        action="store_true",
        help="Redraw the text view every REFRESH_SECONDS until interrupted.",
    )
    return parser.parse_args()


def render_text(view: DayView, hidden_titles: tuple[str, ...]) -> str:
    """Human-readable rendering of one day view."""
    lines = [long_date(view.now), status_line(view), ""]

    if not view.has_data:
        lines.append("No schedule data available.")
    elif view.no_school:
        lines.append("No school today.")
    else:
        for period in view.periods:
            if period.status == "next":
                lines.append(f"  >> Next class starts in {human_duration(period.starts_in)}")

            span = f"{clock_time(period.start)}–{clock_time(period.end)}"
            text = f"{span:<16} {period.label}"
            if period.info is not None:
                text += f" · {period.info.name}"
                text += f"  (Room {period.info.room} • {teacher_last(period.info.teacher)})"
            if period.status == "active":
                text += f"  [now, {human_duration(period.remaining)} left]"
            elif period.status == "passed":
                text += "  [done]"
            lines.append(text)

    lines.append("")
    lines.append("Events:")
    events = visible_events(view.events, hidden_titles)
    if not events:
        lines.append("  No events scheduled for today.")
    for item in events:
        text = f"  {event_time_text(item.event):<16} {item.event.title}"
        if item.event.location:
            text += f" @ {item.event.location}"
        if item.status in ("active", "passed"):
            text += f"  [{item.status}]"
        lines.append(text)

    return "\n".join(lines)


def main() -> int:
    args = _parse_args()
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    try:
        tz = school_timezone(config.schedule_timezone)
    except (KeyError, ValueError) as e:
        _log(f"ERROR: unknown timezone {config.schedule_timezone!r}: {e}")
        return 1

    data_path = args.data if args.data is not None else config.schedule_data_path
    calendar_source = args.calendar if args.calendar is not None else config.calendar_source
    simulated = args.now if args.now is not None else config.simulated_now

    data, _ = load_schedule_data(data_path)
    calendar = load_calendar(
        calendar_source,
        tz,
        timeout=config.calendar_timeout_seconds,
        attempts=config.calendar_fetch_attempts,
        a_day_title=config.a_day_title,
        b_day_title=config.b_day_title,
    )
    log.info(
        "viewer_started",
        overrides=len(calendar.overrides),
        events=len(calendar.events),
        simulated=simulated.isoformat() if simulated else None,
    )

    def render() -> DayView:
        now = resolve_now(tz, simulated)
        return build_day_view(
            now, data, calendar, reduced_weekday=config.reduced_weekday
        )

    if args.json:
        print(render().model_dump_json(indent=2))
        return 0

    if not args.watch:
        print(render_text(render(), config.sentinel_titles))
        return 0

    last = None
    try:
        while True:
            text = render_text(render(), config.sentinel_titles)
            if text != last:
                # Clear screen and redraw
                print("\033[2J\033[H" + text, flush=True)
                last = text
            time.sleep(config.refresh_seconds)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
