"""Tests for mapping window lengths back onto the catalog."""

import datetime
import math

import pytest

from timewindow.catalog import build_catalog
from timewindow.matching import find_closest_time_scale
from timewindow.models import CUSTOM_KEY

LABELS = build_catalog(datetime.date(2024, 7, 1)).labels()


@pytest.mark.parametrize("label", LABELS)
def test_exact_length_matches_preset(catalog, now, label):
    entry = catalog[label]
    result = find_closest_time_scale(
        entry.window_size.total_seconds(), now=now, catalog=catalog
    )
    assert result.key == label
    assert result == entry


def test_past_hour(catalog, now):
    result = find_closest_time_scale(3600, now=now, catalog=catalog)
    assert result is catalog["Past 1 Hour"]


def test_nearest_preset_is_tagged_custom(catalog, now):
    # 1000s from one hour, 2600s from 30 minutes
    result = find_closest_time_scale(5000, now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY
    assert result.window_size == datetime.timedelta(hours=1)
    assert result.sample_size == catalog["Past 1 Hour"].sample_size


def test_custom_result_does_not_touch_catalog(catalog, now):
    find_closest_time_scale(5000, now=now, catalog=catalog)
    assert catalog["Past 1 Hour"].key == "Past 1 Hour"


def test_tie_goes_to_first_preset(catalog, now):
    # 20 minutes is 600s away from both 10 and 30 minutes
    result = find_closest_time_scale(1200, now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY
    assert result.window_size == datetime.timedelta(minutes=10)


def test_longer_than_every_preset(catalog, now):
    result = find_closest_time_scale(365 * 86400, now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY
    assert result.window_size == catalog["Past 2 Months"].window_size


def test_float_drift_is_not_custom(catalog, now):
    result = find_closest_time_scale(3600.0000001, now=now, catalog=catalog)
    assert result.key == "Past 1 Hour"


def test_exact_length_with_old_start_is_custom(catalog, now):
    # June 1 - June 2 selected on July 1: one day long, but not the past day
    start = datetime.datetime(2024, 6, 1, tzinfo=datetime.timezone.utc)
    result = find_closest_time_scale(86400, start.timestamp(), now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY
    assert result.window_size == datetime.timedelta(days=1)


def test_exact_length_anchored_at_now_keeps_key(catalog, now):
    start = now - datetime.timedelta(days=1)
    result = find_closest_time_scale(86400, start.timestamp(), now=now, catalog=catalog)
    assert result.key == "Past 1 Day"


def test_exact_length_with_later_start_keeps_key(catalog, now):
    start = now - datetime.timedelta(hours=2)
    result = find_closest_time_scale(86400, start.timestamp(), now=now, catalog=catalog)
    assert result.key == "Past 1 Day"


def test_epoch_start_is_custom(catalog, now):
    result = find_closest_time_scale(86400, 0, now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY


def test_start_is_ignored_without_exact_match(catalog, now):
    start = now - datetime.timedelta(minutes=20)
    result = find_closest_time_scale(1300, start.timestamp(), now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY
    assert result.window_size == datetime.timedelta(minutes=30)


@pytest.mark.parametrize("seconds", [math.inf, -math.inf, math.nan])
def test_non_finite_length_is_custom(catalog, now, seconds):
    result = find_closest_time_scale(seconds, now=now, catalog=catalog)
    assert result.key == CUSTOM_KEY
    assert result.window_size == catalog["Past 10 Minutes"].window_size
    assert catalog["Past 10 Minutes"].key == "Past 10 Minutes"
