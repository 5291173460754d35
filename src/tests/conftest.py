import datetime

import pytest

from timewindow.catalog import ScaleCatalog, build_catalog


@pytest.fixture
def now() -> datetime.datetime:
    return datetime.datetime(2024, 7, 1, 12, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def catalog(now: datetime.datetime) -> ScaleCatalog:
    # July has 31 days, so "Past Month" is 31 days long
    return build_catalog(now.date())
