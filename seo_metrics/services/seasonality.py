"""Seasonality detection over monthly search volumes."""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from ..config import load_reference_tables
from ..models.reference import ReferenceTables
from ..models.trend import SeasonalityResult
from ..models.volume import normalize_series
from ..utils.statistics import coefficient_of_variation, mean


class SeasonalityDetector:
    """
    Detects recurring calendar-month patterns in a volume series.

    Volumes are averaged per calendar month across all years present. A month
    is a peak when its average is strictly more than 20% above the mean of
    the monthly averages, and a low when strictly more than 20% below. The
    series is seasonal with at least two peaks or a coefficient of variation
    strictly above 0.25.
    """

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    @staticmethod
    def monthly_averages(series: Iterable[Any]) -> Dict[int, float]:
        """Average volume per calendar month (1-12) across all years."""
        buckets: Dict[int, List[int]] = defaultdict(list)
        for point in series:
            buckets[point.month].append(point.search_volume)
        return {month: mean(volumes) for month, volumes in sorted(buckets.items())}

    def detect(self, series: Iterable[Any]) -> SeasonalityResult:
        """Classify a series as seasonal and locate its peak and low months."""
        settings = self.tables.seasonality
        series = normalize_series(series)

        if len(series) < settings.min_points:
            logger.debug(
                "Seasonality skipped: {} points, need {}",
                len(series), settings.min_points,
            )
            return SeasonalityResult(is_seasonal=False)

        averages = self.monthly_averages(series)
        overall = mean(averages.values())

        upper = overall * (1 + settings.peak_ratio)
        lower = overall * (1 - settings.peak_ratio)
        peaks = tuple(m for m, avg in averages.items() if avg > upper)
        lows = tuple(m for m, avg in averages.items() if avg < lower)

        cv = coefficient_of_variation(averages.values())
        is_seasonal = len(peaks) >= settings.min_peak_months or cv > settings.cv_threshold

        logger.debug(
            "Seasonality: peaks={} lows={} cv={:.3f} seasonal={}",
            peaks, lows, cv, is_seasonal,
        )

        return SeasonalityResult(
            is_seasonal=is_seasonal,
            peak_months=peaks,
            low_months=lows,
            monthly_averages=averages,
            coefficient_of_variation=cv,
        )
