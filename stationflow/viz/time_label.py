# stationflow/viz/time_label.py
from stationflow.traffic.time_index import MINUTES_PER_DAY


def format_time(minutes: int) -> str:
    """12-hour wall-clock label: 0 -> "12:00 AM", 750 -> "12:30 PM"."""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise ValueError(f"minutes must be an int, got {minutes!r}")
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes must be in [0, {MINUTES_PER_DAY - 1}], got {minutes}")

    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"
