"""The session-wide time window, used by all metrics graphs of a dashboard.

Transitions never mutate a state: each one returns a new `TimeWindowState`, so anyone holding a
previous state keeps a stable snapshot.
"""

import threading
from dataclasses import dataclass, field, replace

from timewindow.catalog import AVAILABLE_TIME_SCALES, DEFAULT_SCALE_KEY
from timewindow.models import TimeScale, TimeWindow


def _default_scale() -> TimeScale:
    return AVAILABLE_TIME_SCALES[DEFAULT_SCALE_KEY]


@dataclass(frozen=True)
class TimeWindowState:
    # Currently selected scale
    scale: TimeScale = field(default_factory=_default_scale)
    # Currently established window, None until first materialized
    current_window: TimeWindow | None = None
    # True if scale has changed since current_window was generated
    scale_changed: bool = False
    # True if the user pinned an explicit range that must not be recomputed
    use_time_range: bool = False


def set_window(state: TimeWindowState, window: TimeWindow) -> TimeWindowState:
    return replace(state, current_window=window, scale_changed=False)


def set_range(state: TimeWindowState, window: TimeWindow) -> TimeWindowState:
    return replace(state, current_window=window, use_time_range=True, scale_changed=False)


def set_scale(state: TimeWindowState, scale: TimeScale) -> TimeWindowState:
    return replace(state, scale=scale, use_time_range=scale.is_custom, scale_changed=True)


@dataclass(frozen=True)
class SetWindow:
    window: TimeWindow


@dataclass(frozen=True)
class SetRange:
    window: TimeWindow


@dataclass(frozen=True)
class SetScale:
    scale: TimeScale


def time_window_reducer(state: TimeWindowState | None, action: object) -> TimeWindowState:
    """Apply `action` to `state`. Unknown actions leave the state unchanged."""
    if state is None:
        state = TimeWindowState()
    match action:
        case SetWindow(window=window):
            return set_window(state, window)
        case SetRange(window=window):
            return set_range(state, window)
        case SetScale(scale=scale):
            return set_scale(state, scale)
        case _:
            return state


class TimeWindowStore:
    """Holds the current TimeWindowState of a session.

    `dispatch` reads and replaces the whole state under a lock, so concurrent callers never
    observe a partially applied transition.
    """

    def __init__(self, state: TimeWindowState | None = None) -> None:
        self._state = state or TimeWindowState()
        self._lock = threading.Lock()

    @property
    def state(self) -> TimeWindowState:
        return self._state

    def dispatch(self, action: object) -> TimeWindowState:
        with self._lock:
            self._state = time_window_reducer(self._state, action)
            return self._state
