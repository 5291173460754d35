import datetime
from dataclasses import dataclass

from timewindow.time_utils import to_utc

CUSTOM_KEY = "Custom"


@dataclass(frozen=True)
class TimeWindow:
    """An absolute window of time, defined with a start and end time."""

    start: datetime.datetime
    end: datetime.datetime

    def __post_init__(self) -> None:
        # Frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))
        if self.start > self.end:
            raise ValueError(f"Invalid time window, {self.start=} is after {self.end=}")

    @property
    def duration(self) -> datetime.timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class TimeScale:
    """The requested dimensions of time windows.

    A scale prescribes a length for the window along with a period of time that a newly created
    window remains valid. It is a policy, not a concrete window: `window_at` resolves it against a
    clock.
    """

    # How far back the window reaches
    window_size: datetime.timedelta
    # Expected duration of individual samples for queries at this scale
    sample_size: datetime.timedelta
    # A window is stale once now > window.end + window_valid. Ignored if window_end is set.
    window_valid: datetime.timedelta | None = None
    # Catalog label, or CUSTOM_KEY
    key: str | None = None
    # End of the window if it isn't the present
    window_end: datetime.datetime | None = None

    @property
    def is_custom(self) -> bool:
        return self.key == CUSTOM_KEY

    def window_at(self, now: datetime.datetime) -> TimeWindow:
        end = to_utc(self.window_end) if self.window_end is not None else to_utc(now)
        return TimeWindow(start=end - self.window_size, end=end)
