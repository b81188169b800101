"""Shared fixtures for the SEO Metrics test suite."""

import pytest

from seo_metrics.config import build_reference_tables, load_reference_tables
from seo_metrics.models.volume import MonthlyVolumePoint


def make_series(volumes, start_year=2022, start_month=1):
    """Build consecutive monthly points starting at the given month."""
    points = []
    year, month = start_year, start_month
    for volume in volumes:
        points.append(MonthlyVolumePoint(year=year, month=month, search_volume=volume))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return points


@pytest.fixture
def tables():
    """Default reference tables."""
    return build_reference_tables()


@pytest.fixture
def flat_series():
    """24 months at a constant volume of 1000."""
    return make_series([1000] * 24)


@pytest.fixture
def holiday_series():
    """Two years peaking in November and December."""
    year = [800, 800, 800, 800, 800, 800, 800, 800, 800, 800, 2000, 2400]
    return make_series(year * 2)


@pytest.fixture(autouse=True)
def _clear_table_cache():
    """Keep environment-driven table loading isolated between tests."""
    load_reference_tables.cache_clear()
    yield
    load_reference_tables.cache_clear()


@pytest.fixture
def series():
    """Factory for consecutive monthly series."""
    return make_series
