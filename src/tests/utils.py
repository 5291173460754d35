import datetime

from timewindow.models import TimeWindow
from timewindow.time_utils import parse_duration


def ago(now: datetime.datetime, text: str) -> datetime.datetime:
    """Usage:

        ago(now, "3 days") == now - datetime.timedelta(days=3)
    """
    return now - parse_duration(text)


def window_since(now: datetime.datetime, text: str) -> TimeWindow:
    return TimeWindow(start=ago(now, text), end=now)
