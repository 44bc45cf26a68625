"""Schedule resolution — time-of-day strings to same-day instants.

Pure functions: no clock access, no I/O. Callers pass ``now`` explicitly.
Only hour and minute of a configured time are significant; seconds are
always truncated to zero on the resolved instant.
"""

from __future__ import annotations

import datetime as dt

# Tried in order. ``%I`` formats require an AM/PM marker.
_TIME_FORMATS: tuple[str, ...] = (
    "%H:%M",
    "%H:%M:%S",
    "%I:%M %p",
    "%I:%M:%S %p",
    "%I:%M%p",
    "%I %p",
    "%I%p",
)


def parse_time_of_day(text: str | None) -> dt.time | None:
    """Parse a free-form local time string.

    Accepts ``"09:05"``, ``"21:05:30"``, ``"9:05 PM"``, ``"9 pm"`` and full
    ISO datetimes such as ``"2024-01-05 09:05"`` (the date part is ignored).
    Returns None when the text is not a time of day.
    """
    if text is None:
        return None
    candidate = " ".join(text.split()).upper()
    if not candidate:
        return None

    for fmt in _TIME_FORMATS:
        try:
            parsed = dt.datetime.strptime(candidate, fmt)
        except ValueError:
            continue
        return dt.time(parsed.hour, parsed.minute)

    try:
        parsed = dt.datetime.fromisoformat(text.strip())
    except ValueError:
        return None
    return dt.time(parsed.hour, parsed.minute)


def resolve(now: dt.datetime, time_of_day: dt.time) -> dt.datetime:
    """Bind *time_of_day* to *now*'s calendar date, seconds zeroed."""
    return now.replace(
        hour=time_of_day.hour,
        minute=time_of_day.minute,
        second=0,
        microsecond=0,
    )


def has_passed(instant: dt.datetime, now: dt.datetime) -> bool:
    """True when *instant* is strictly before *now*."""
    return instant < now


def format_instant(instant: dt.datetime) -> str:
    """Render an instant as a 12-hour clock time for log lines."""
    return instant.strftime("%I:%M %p")
