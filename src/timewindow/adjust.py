"""Downgrade a time scale against the metrics store's retention boundaries.

The store keeps metrics at 10 second resolution for a while, then rolls them up into 30 minute
resolution and finally removes them:

     (removed)   (stored with 30min resolution)    (stored with 10s resolution)
    -----------X----------------------------------X------------------------------X------>
      [now - resolution_30m_ttl]        [now - resolution_10s_ttl]             [now]

- samples older than the 30 minute TTL are deleted
- samples between the two TTLs are only available at 30 minute resolution
- samples newer than the 10 second TTL are available at full resolution

`adjust_time_scale` checks whether a window and scale can be queried under these restrictions.
"""

import datetime
import logging
from dataclasses import dataclass, replace
from enum import StrEnum

from timewindow.models import TimeScale, TimeWindow
from timewindow.time_utils import to_utc, utcnow

logger = logging.getLogger(__name__)

RESOLUTION_30M = datetime.timedelta(minutes=30)


class AdjustmentReason(StrEnum):
    LOW_RESOLUTION_PERIOD = "low_resolution_period"
    DELETED_DATA_PERIOD = "deleted_data_period"


@dataclass(frozen=True)
class AdjustedTimeScale:
    time_scale: TimeScale | None
    adjustment_reason: AdjustmentReason | None = None


def adjust_time_scale(
    scale: TimeScale | None,
    window: TimeWindow | None,
    ttl_10s: datetime.timedelta | None,
    ttl_30m: datetime.timedelta | None,
    *,
    now: datetime.datetime | None = None,
) -> AdjustedTimeScale:
    """Adjust `scale` so that querying `window` doesn't ask for data the store no longer holds.

    Missing inputs are not an error: the caller may not know the retention policy yet, so the
    scale is passed through unchanged.

    Args:
        scale: Scale the query would use
        window: Window the query would cover
        ttl_10s: Retention of 10 second resolution data
        ttl_30m: Retention of 30 minute resolution data
        now: Clock the retention boundaries are computed from (default: current UTC time)

    Returns:
        A fresh copy of the (possibly downgraded) scale and the reason for the adjustment, if any.
        A deleted data period takes precedence over a low resolution one.
    """
    time_scale = replace(scale) if scale is not None else None
    if time_scale is None or window is None or ttl_10s is None or ttl_30m is None:
        return AdjustedTimeScale(time_scale)

    now = to_utc(now or utcnow())
    reason = None

    outside_10s_resolution = window.start < now - ttl_10s
    if outside_10s_resolution and time_scale.sample_size <= RESOLUTION_30M:
        time_scale = replace(time_scale, sample_size=RESOLUTION_30M)
        reason = AdjustmentReason.LOW_RESOLUTION_PERIOD

    if window.start < now - ttl_30m:
        reason = AdjustmentReason.DELETED_DATA_PERIOD

    if reason is not None:
        logger.debug(
            "Adjusted %r for window starting %s: %s, sample size %s",
            time_scale.key,
            window.start,
            reason,
            time_scale.sample_size,
        )
    return AdjustedTimeScale(time_scale, reason)
