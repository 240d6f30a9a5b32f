"""Duration parsing for ffmpeg output and ETA strings for progress logs."""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

DURATION_REGEX = re.compile(r"Duration: (?P<duration>[^,]+)")
_HMS_REGEX = re.compile(r"^(?P<hours>\d+):(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d+))?$")


def parse_hms(text: str) -> Optional[timedelta]:
    """Parse ``H:MM:SS.fraction`` into a timedelta, None if it does not match."""
    match = _HMS_REGEX.match(text.strip())
    if not match:
        return None
    fraction = match.group("fraction") or "0"
    # timedelta keeps microseconds; anything finer is dropped.
    microseconds = int(fraction[:6].ljust(6, "0"))
    return timedelta(
        hours=int(match.group("hours")),
        minutes=int(match.group("minutes")),
        seconds=int(match.group("seconds")),
        microseconds=microseconds,
    )


def find_duration(log: str) -> Optional[timedelta]:
    """Return the first ``Duration:`` value of an ffmpeg log.

    Only the first occurrence is considered; a first occurrence that is not
    a time (``Duration: N/A``) yields None.
    """
    match = DURATION_REGEX.search(log)
    if not match:
        return None
    return parse_hms(match.group("duration"))


def to_milliseconds(duration: timedelta) -> int:
    """Total milliseconds, truncated toward zero."""
    return duration // timedelta(milliseconds=1)


def get_eta_total(completed_count, total_count, elapsed_seconds):
    avg_time_per_item = elapsed_seconds / completed_count
    remaining_seconds = avg_time_per_item * (total_count - completed_count)
    return _get_eta_string(remaining_seconds)


def _get_eta_string(time_in_seconds):
    completion_time = (datetime.now(timezone.utc) + timedelta(
        seconds=time_in_seconds)).strftime("%Y-%m-%d %H:%M:%S")

    eta_hours = int(time_in_seconds // 3600)
    eta_mins = int((time_in_seconds % 3600) // 60)
    eta_secs = int(time_in_seconds % 60)
    if eta_hours > 0:
        formatted_time = f"{eta_hours}h{eta_mins}m{eta_secs}s"
    elif eta_mins > 0:
        formatted_time = f"{eta_mins}m{eta_secs}s"
    else:
        formatted_time = f"{eta_secs}s"

    return f"{completion_time} ({formatted_time})"
