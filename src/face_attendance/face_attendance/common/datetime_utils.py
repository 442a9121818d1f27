from __future__ import annotations

from datetime import datetime, time, timezone

from ..core.constants import DAY_ORDER


def now_local() -> datetime:
    """Current local wall-clock time (naive)."""
    return datetime.now()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def epoch_seconds(moment: datetime) -> int:
    return int(moment.timestamp())


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def iso_timestamp(moment: datetime) -> str:
    return moment.isoformat()


def iso_date(moment: datetime) -> str:
    return moment.date().isoformat()


def weekday_name(moment: datetime) -> str:
    """English weekday name, independent of the process locale."""
    return DAY_ORDER[moment.weekday()]


def day_index(day: str) -> int:
    """Position of a weekday name in the week; unknown names sort last."""
    try:
        return DAY_ORDER.index(day)
    except ValueError:
        return len(DAY_ORDER)


def parse_hhmm(value: str) -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS') into a time of day."""
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time string: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=hours, minute=minutes, second=seconds)


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def minute_of(moment: datetime) -> time:
    """Wall-clock time truncated to the minute."""
    return moment.time().replace(second=0, microsecond=0)
