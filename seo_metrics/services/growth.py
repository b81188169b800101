"""Year-over-year growth and volatility of search volumes."""

from typing import Any, Iterable, Optional

from loguru import logger

from ..config import load_reference_tables
from ..models.reference import ReferenceTables
from ..models.volume import normalize_series
from ..utils.statistics import coefficient_of_variation, mean, round_half_up


class GrowthAnalyzer:
    """Computes growth rate and a 0-100 volatility score for a series."""

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    def growth_rate(self, series: Iterable[Any]) -> float:
        """Year-over-year growth in percent, rounded to one decimal.

        Compares the mean of the most recent 12 points against the mean of
        the 12 points before them. Returns 0 with fewer than 13 points, when
        the earlier window is incomplete, or when its mean is 0.
        """
        window = self.tables.growth.window
        volumes = [p.search_volume for p in normalize_series(series)]

        if len(volumes) < window + 1:
            return 0.0

        recent = volumes[-window:]
        previous = volumes[-2 * window:-window]
        if len(previous) < window:
            logger.debug(
                "Growth skipped: previous window has {} of {} points",
                len(previous), window,
            )
            return 0.0

        previous_avg = mean(previous)
        if previous_avg == 0:
            return 0.0

        growth = (mean(recent) - previous_avg) / previous_avg * 100
        return round_half_up(growth, 1)

    def volatility(self, series: Iterable[Any]) -> int:
        """Coefficient of variation as a percentage, capped at 100."""
        volumes = [p.search_volume for p in normalize_series(series)]
        if len(volumes) < 2:
            return 0

        cv = coefficient_of_variation(volumes)
        return min(int(round_half_up(cv * 100)), 100)
