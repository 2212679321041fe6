"""Schedule-based project progress.

Progress is derived from the calendar only and never persisted.
"""

import math
from datetime import datetime

from src.tracker.models.base import to_naive_utc, utc_now

_SECONDS_PER_DAY = 86400


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_progress(start: datetime, end: datetime, now: datetime | None = None) -> int:
    """Percentage of the schedule elapsed at `now`, clamped to 0..100.

    Both elapsed and total spans are rounded up to whole days. A zero or
    negative span counts as one day.
    """
    start = to_naive_utc(start)
    end = to_naive_utc(end)
    now = to_naive_utc(now) if now is not None else utc_now()

    total_days = max(1, math.ceil((end - start).total_seconds() / _SECONDS_PER_DAY))
    days_elapsed = math.ceil((now - start).total_seconds() / _SECONDS_PER_DAY)

    percent = _round_half_up(days_elapsed / total_days * 100)
    return min(100, max(0, percent))


def average_progress(values: list[int]) -> int:
    if not values:
        return 0
    return _round_half_up(sum(values) / len(values))
