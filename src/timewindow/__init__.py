"""Metrics time window

Time scale presets, nearest-scale matching and resolution adjustment against the metrics store's
retention, plus the session state of the currently selected window.
"""

from .adjust import AdjustedTimeScale, AdjustmentReason, adjust_time_scale
from .catalog import AVAILABLE_TIME_SCALES, DEFAULT_SCALE_KEY, ScaleCatalog, build_catalog
from .matching import find_closest_time_scale
from .models import CUSTOM_KEY, TimeScale, TimeWindow
from .state import SetRange, SetScale, SetWindow, TimeWindowState, time_window_reducer

__version__ = "1.0.0"

__all__ = [
    "AVAILABLE_TIME_SCALES",
    "CUSTOM_KEY",
    "DEFAULT_SCALE_KEY",
    "AdjustedTimeScale",
    "AdjustmentReason",
    "ScaleCatalog",
    "SetRange",
    "SetScale",
    "SetWindow",
    "TimeScale",
    "TimeWindow",
    "TimeWindowState",
    "adjust_time_scale",
    "build_catalog",
    "find_closest_time_scale",
    "time_window_reducer",
]
