"""Helper utilities for the Streamlit dashboard"""

import datetime

import pandas as pd

from timewindow.adjust import AdjustmentReason
from timewindow.models import TimeWindow
from timewindow.retention import StorageTTLs
from timewindow.time_utils import format_duration, to_utc

ADJUSTMENT_MESSAGES = {
    AdjustmentReason.LOW_RESOLUTION_PERIOD: (
        "Data older than {ttl_10s} is only stored at 30 minute resolution. "
        "Showing the selected period at 30 minute resolution."
    ),
    AdjustmentReason.DELETED_DATA_PERIOD: (
        "Data older than {ttl_30m} has been deleted. "
        "Part of the selected period has no data."
    ),
}


def adjustment_message(reason: AdjustmentReason | None, ttls: StorageTTLs) -> str | None:
    """Banner text for an adjustment reason, or None when nothing was adjusted."""
    if reason is None:
        return None
    return ADJUSTMENT_MESSAGES[reason].format(
        ttl_10s=format_duration(ttls.resolution_10s),
        ttl_30m=format_duration(ttls.resolution_30m),
    )


def retention_bands(now: datetime.datetime, ttls: StorageTTLs, window: TimeWindow) -> pd.DataFrame:
    """Build the rows of the retention timeline chart.

    Three bands (deleted, 30m resolution, 10s resolution) span from the earliest point of interest
    up to now; a fourth row is the query window itself.

    Returns:
        DataFrame with columns: band, start, end
    """
    now = to_utc(now)
    boundary_30m = now - ttls.resolution_30m
    boundary_10s = now - ttls.resolution_10s
    earliest = min(window.start, boundary_30m, boundary_10s)
    rows = [
        ("Deleted", earliest, boundary_30m),
        ("30m resolution", boundary_30m, boundary_10s),
        ("10s resolution", boundary_10s, now),
        ("Query window", window.start, window.end),
    ]
    # Empty bands are possible when the TTLs are out of order
    return pd.DataFrame(
        [row for row in rows if row[1] < row[2]], columns=["band", "start", "end"]
    )
