import datetime
from unittest import mock

import pytest

from timewindow.retention import StorageTTLs, fetch_storage_ttls


@pytest.mark.asyncio
async def test_fetch_storage_ttls() -> None:
    connection = mock.AsyncMock()
    connection.fetchval.side_effect = [datetime.timedelta(days=10), datetime.timedelta(days=90)]

    ttls = await fetch_storage_ttls(connection)

    assert ttls == StorageTTLs(datetime.timedelta(days=10), datetime.timedelta(days=90))
    assert connection.fetchval.await_args_list == [
        mock.call("SHOW CLUSTER SETTING timeseries.storage.resolution_10s.ttl"),
        mock.call("SHOW CLUSTER SETTING timeseries.storage.resolution_30m.ttl"),
    ]


@pytest.mark.asyncio
async def test_fetch_storage_ttls_from_strings() -> None:
    """Settings reported as text are parsed"""
    connection = mock.AsyncMock()
    connection.fetchval.side_effect = ["240:00:00", "90 days"]

    ttls = await fetch_storage_ttls(connection)

    assert ttls.resolution_10s == datetime.timedelta(days=10)
    assert ttls.resolution_30m == datetime.timedelta(days=90)


@pytest.mark.asyncio
async def test_fetch_storage_ttls_unparseable() -> None:
    connection = mock.AsyncMock()
    connection.fetchval.side_effect = ["forever", "90 days"]

    with pytest.raises(ValueError):
        await fetch_storage_ttls(connection)
