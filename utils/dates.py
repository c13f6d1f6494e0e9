"""Local-day arithmetic for results, streaks and achievements."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from config import Config


def local_zone() -> ZoneInfo | None:
    """Return the configured zone, or None to use the system zone."""
    if Config.LOCAL_TIMEZONE:
        return ZoneInfo(Config.LOCAL_TIMEZONE)
    return None


def now() -> datetime:
    """Current local wall-clock time as a naive datetime."""
    zone = local_zone()
    if zone is None:
        return datetime.now()
    return datetime.now(zone).replace(tzinfo=None)


def to_local(dt: datetime) -> datetime:
    """Convert an aware datetime to naive local time. Naive values pass through.

    Results are dated in local wall-clock time so that day bucketing and
    hour-of-day checks agree with what the player saw.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(local_zone()).replace(tzinfo=None)


def local_day(dt: datetime) -> date:
    """Calendar day of a datetime in local time."""
    return to_local(dt).date()


def day_gap(earlier: datetime, later: datetime) -> int:
    """Number of calendar days from `earlier` to `later`."""
    return (local_day(later) - local_day(earlier)).days


def is_today_or_yesterday(day: date, today: date) -> bool:
    return day == today or day == today - timedelta(days=1)


def clock_to_seconds(clock: str) -> int:
    """Convert an "m:ss" string to seconds. Returns 0 if it can't be read."""
    parts = clock.strip().split(":")
    if len(parts) != 2:
        return 0
    try:
        minutes, seconds = int(parts[0]), int(parts[1])
    except ValueError:
        return 0
    return minutes * 60 + seconds


def seconds_to_clock(total_seconds: int) -> str:
    """Format seconds as "m:ss"."""
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"
