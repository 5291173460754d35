"""Read the metrics store's retention policy from the cluster"""

import datetime
import logging
from dataclasses import dataclass

import asyncpg

from timewindow.time_utils import parse_duration

logger = logging.getLogger(__name__)

RESOLUTION_10S_TTL_SETTING = "timeseries.storage.resolution_10s.ttl"
RESOLUTION_30M_TTL_SETTING = "timeseries.storage.resolution_30m.ttl"


@dataclass(frozen=True)
class StorageTTLs:
    resolution_10s: datetime.timedelta
    resolution_30m: datetime.timedelta


def _to_timedelta(value: datetime.timedelta | str) -> datetime.timedelta:
    if isinstance(value, datetime.timedelta):
        return value
    return parse_duration(value)


async def fetch_cluster_setting(
    connection: asyncpg.Connection, name: str
) -> datetime.timedelta:
    # Setting names can't be bound as query parameters
    value = await connection.fetchval(f"SHOW CLUSTER SETTING {name}")
    return _to_timedelta(value)


async def fetch_storage_ttls(connection: asyncpg.Connection) -> StorageTTLs:
    ttls = StorageTTLs(
        resolution_10s=await fetch_cluster_setting(connection, RESOLUTION_10S_TTL_SETTING),
        resolution_30m=await fetch_cluster_setting(connection, RESOLUTION_30M_TTL_SETTING),
    )
    logger.debug("Storage TTLs: 10s=%s, 30m=%s", ttls.resolution_10s, ttls.resolution_30m)
    return ttls


async def connect(**db_config) -> asyncpg.Connection:
    return await asyncpg.connect(**{k: v for k, v in db_config.items() if v is not None})
