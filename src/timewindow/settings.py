import datetime
import json
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any

from timewindow.catalog import DEFAULT_SCALE_KEY
from timewindow.time_utils import parse_duration

# Cluster defaults for timeseries.storage.resolution_{10s,30m}.ttl
RESOLUTION_10S_TTL = datetime.timedelta(days=10)
RESOLUTION_30M_TTL = datetime.timedelta(days=90)

DB_CONFIG: dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 26257,
    "database": "system",
    "user": "root",
    "password": None,
}

SETTINGS_FILE = pathlib.Path(os.environ.get("TIMEWINDOW_SETTINGS", "timewindow.json"))


@dataclass(frozen=True)
class Settings:
    resolution_10s_ttl: datetime.timedelta = RESOLUTION_10S_TTL
    resolution_30m_ttl: datetime.timedelta = RESOLUTION_30M_TTL
    default_scale: str = DEFAULT_SCALE_KEY
    db: dict[str, Any] = field(default_factory=lambda: dict(DB_CONFIG))


def _ttl(raw: dict[str, Any], name: str, default: datetime.timedelta) -> datetime.timedelta:
    value = raw.get(name, default)
    if isinstance(value, datetime.timedelta):
        return value
    # Plain numbers are seconds
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.timedelta(seconds=value)
        except OverflowError as e:
            raise ValueError(f"Invalid {name}: {value!r}") from e
    if isinstance(value, str):
        return parse_duration(value)
    raise ValueError(f"Invalid {name}: {value!r}")


def load_settings(path: pathlib.Path | None = None) -> Settings:
    """Load settings from a JSON file, falling back to the defaults.

    Example file:

        {
            "resolution_10s_ttl": "10 days",
            "resolution_30m_ttl": 7776000,
            "default_scale": "Past 1 Hour",
            "db": {"host": "localhost", "port": 26257}
        }

    Args:
        path: Settings file (default: SETTINGS_FILE)

    Raises:
        ValueError: If a value in the file has the wrong type or a TTL is not a recognized duration
    """
    try:
        with open(path or SETTINGS_FILE) as f:
            raw = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        raw = {}
    if not isinstance(raw, dict):
        raw = {}

    settings = Settings()
    default_scale = raw.get("default_scale", settings.default_scale)
    if not isinstance(default_scale, str):
        raise ValueError(f"Invalid default_scale: {default_scale!r}")
    db = raw.get("db", {})
    if not isinstance(db, dict):
        raise ValueError(f"Invalid db: {db!r}")

    return Settings(
        resolution_10s_ttl=_ttl(raw, "resolution_10s_ttl", settings.resolution_10s_ttl),
        resolution_30m_ttl=_ttl(raw, "resolution_30m_ttl", settings.resolution_30m_ttl),
        default_scale=default_scale,
        db={**settings.db, **db},
    )
