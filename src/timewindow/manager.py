"""Keeps the materialized time window fresh.

A window derived from a scale is valid for `scale.window_valid` past its end. After that it has to
be recomputed against the current clock. Fixed windows (`scale.window_end`) and pinned ranges
(`use_time_range`) never expire.
"""

import datetime
import logging

from timewindow.state import TimeWindowState, set_window
from timewindow.time_utils import to_utc, utcnow

logger = logging.getLogger(__name__)


def window_expires_at(state: TimeWindowState) -> datetime.datetime | None:
    """When the current window goes stale, or None if it never does."""
    if (
        state.current_window is None
        or state.use_time_range
        or state.scale.window_end is not None
        or state.scale.window_valid is None
    ):
        return None
    return state.current_window.end + state.scale.window_valid


def needs_refresh(state: TimeWindowState, *, now: datetime.datetime | None = None) -> bool:
    if state.current_window is None or state.scale_changed:
        return True
    expires = window_expires_at(state)
    if expires is None:
        return False
    return to_utc(now or utcnow()) > expires


def refresh_window(
    state: TimeWindowState, *, now: datetime.datetime | None = None
) -> TimeWindowState:
    """Materialize a new window from the selected scale if the current one is missing or stale.

    A pinned range keeps its window; only the scale change is acknowledged.
    """
    now = to_utc(now or utcnow())
    if not needs_refresh(state, now=now):
        return state
    if state.use_time_range and state.scale.window_end is None and state.current_window is not None:
        return set_window(state, state.current_window)

    window = state.scale.window_at(now)
    logger.debug("Refreshed %r window: %s - %s", state.scale.key, window.start, window.end)
    return set_window(state, window)
