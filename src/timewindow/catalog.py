"""Preconfigured time scales that can be selected by the user"""

import datetime
from collections.abc import Iterable, Iterator
from dataclasses import replace

from timewindow.models import TimeScale
from timewindow.time_utils import days_in_month, utcnow

DEFAULT_SCALE_KEY = "Past 10 Minutes"


class ScaleCatalog:
    """Ordered, read-only mapping from label to TimeScale.

    Each entry's `key` is set to its own label. Iteration follows insertion order, which is also
    the tie-break order used by the nearest-scale matcher.
    """

    def __init__(self, scales: Iterable[tuple[str, TimeScale]]) -> None:
        self._scales: dict[str, TimeScale] = {
            label: replace(scale, key=label) for label, scale in scales
        }
        if not self._scales:
            raise ValueError("A scale catalog needs at least one entry")

    def lookup(self, label: str) -> TimeScale | None:
        return self._scales.get(label)

    def entries(self) -> tuple[TimeScale, ...]:
        return tuple(self._scales.values())

    def labels(self) -> tuple[str, ...]:
        return tuple(self._scales)

    def __getitem__(self, label: str) -> TimeScale:
        return self._scales[label]

    def __contains__(self, label: object) -> bool:
        return label in self._scales

    def __iter__(self) -> Iterator[TimeScale]:
        return iter(self._scales.values())

    def __len__(self) -> int:
        return len(self._scales)

    def __repr__(self) -> str:
        return f"ScaleCatalog({list(self._scales)!r})"


def build_catalog(today: datetime.date | None = None) -> ScaleCatalog:
    """Build the preset catalog.

    The month-based presets depend on the number of days in `today`'s month, so the catalog is
    built once and reused rather than re-derived per lookup.

    Args:
        today: Calendar day the month-based presets are computed from (default: today, UTC)

    Returns:
        ScaleCatalog with the 11 presets, from 10 minutes to 2 months
    """
    month_days = days_in_month(today or utcnow().date())
    minutes, seconds = datetime.timedelta(minutes=1), datetime.timedelta(seconds=1)
    hours, days = datetime.timedelta(hours=1), datetime.timedelta(days=1)
    return ScaleCatalog(
        [
            ("Past 10 Minutes", TimeScale(10 * minutes, 10 * seconds, 10 * seconds)),
            ("Past 30 Minutes", TimeScale(30 * minutes, 30 * seconds, 30 * seconds)),
            ("Past 1 Hour", TimeScale(1 * hours, 30 * seconds, 1 * minutes)),
            ("Past 6 Hours", TimeScale(6 * hours, 1 * minutes, 5 * minutes)),
            ("Past 1 Day", TimeScale(1 * days, 5 * minutes, 10 * minutes)),
            ("Past 2 Days", TimeScale(2 * days, 5 * minutes, 10 * minutes)),
            ("Past 3 Days", TimeScale(3 * days, 5 * minutes, 10 * minutes)),
            ("Past Week", TimeScale(7 * days, 30 * minutes, 10 * minutes)),
            ("Past 2 Weeks", TimeScale(14 * days, 30 * minutes, 10 * minutes)),
            ("Past Month", TimeScale(month_days * days, 1 * hours, 20 * minutes)),
            ("Past 2 Months", TimeScale(2 * month_days * days, 1 * hours, 20 * minutes)),
        ]
    )


# Frozen at import time, never re-derived mid-process
AVAILABLE_TIME_SCALES = build_catalog()
