"""Human readable durations."""

from datetime import timedelta

_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def human_duration(delta: timedelta) -> str:
    """Describe a duration by its largest whole unit.

    Args:
        delta: Duration to describe (negative values are treated as zero)

    Returns:
        e.g. "1 year", "3 hours", "0 seconds"
    """
    seconds = max(int(delta.total_seconds()), 0)
    for unit, size in _UNITS:
        count = seconds // size
        if count:
            return f"{count} {unit}{'' if count == 1 else 's'}"
    return "0 seconds"
