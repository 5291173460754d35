import datetime
import math
import logging
from dataclasses import replace

from timewindow.catalog import AVAILABLE_TIME_SCALES, ScaleCatalog
from timewindow.models import CUSTOM_KEY, TimeScale
from timewindow.time_utils import to_utc, utcnow

logger = logging.getLogger(__name__)


def _whole_seconds(duration: datetime.timedelta) -> int:
    return round(duration.total_seconds())


def find_closest_time_scale(
    seconds: float,
    start_seconds: float | None = None,
    *,
    now: datetime.datetime | None = None,
    catalog: ScaleCatalog = AVAILABLE_TIME_SCALES,
) -> TimeScale:
    """Map a window length back onto the catalog.

    Returns the catalog entry whose window size is closest to `seconds`. Unless the length matches
    the entry exactly, the result is a copy tagged as custom. An exact match whose explicit start
    lies before `now - window_size` is tagged as custom too: e.g. dragging June 1 00:00 to
    June 2 00:00 on a chart on July 1 is a one-day range, but not the "Past 1 Day" scale.

    Args:
        seconds: Length of the requested window
        start_seconds: Optional unix timestamp of the window start
        now: Clock used for the start check (default: current UTC time)
        catalog: Scales to choose from

    Returns:
        The closest TimeScale, with key CUSTOM_KEY when it isn't a catalog selection
    """
    if not math.isfinite(seconds):
        return replace(catalog.entries()[0], key=CUSTOM_KEY)

    requested = round(seconds)
    # min() keeps the first of equally close entries, i.e. catalog order breaks ties
    best = min(catalog, key=lambda scale: abs(requested - _whole_seconds(scale.window_size)))
    best_seconds = _whole_seconds(best.window_size)

    if best_seconds != requested:
        return replace(best, key=CUSTOM_KEY)

    if start_seconds is not None:
        now_seconds = int(to_utc(now or utcnow()).timestamp())
        if start_seconds < now_seconds - best_seconds:
            logger.debug(
                "Range starting at %s matches %r but isn't anchored at now", start_seconds, best.key
            )
            return replace(best, key=CUSTOM_KEY)

    return best
