"""
Trend Analysis
==============

Composes seasonality detection, growth and volatility, forecasting, and
anomaly detection into one ``TrendAnalysis`` per keyword.

Usage:
    from seo_metrics.services import TrendAnalyzer

    analyzer = TrendAnalyzer()
    report = analyzer.analyze(points, keyword="christmas lights")
    print(report.seasonality_pattern, report.forecast)
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from loguru import logger

from ..config import Settings, get_settings, load_reference_tables
from ..models.reference import ReferenceTables
from ..models.trend import SeasonalityPattern, TrendAnalysis, TrendComparison
from ..models.volume import MonthlyVolumePoint, VolumeSeries, normalize_series
from ..utils.statistics import mean, round_half_up
from .anomalies import AnomalyDetector
from .forecaster import ForecastGenerator
from .growth import GrowthAnalyzer
from .seasonality import SeasonalityDetector

# ---------------------------------------------------------------------------
# Trend comparison bands: (lower bound, exclusive) -> interpretation
# ---------------------------------------------------------------------------

_COMPARISON_BANDS = [
    (20, "Strong growth - Search interest is significantly increasing"),
    (5, "Moderate growth - Positive trend in search interest"),
    (-5, "Stable - Search interest remains consistent"),
    (-20, "Moderate decline - Search interest decreasing"),
]
_COMPARISON_FLOOR = "Significant decline - Search interest dropping rapidly"


class TrendAnalyzer:
    """Full trend report for a keyword's monthly search volumes.

    Parameters
    ----------
    tables : ReferenceTables, optional
        Reference tables shared with every sub-analyzer. Defaults to the
        cached tables from :func:`seo_metrics.config.load_reference_tables`.
    horizon : int
        Number of months to forecast.
    anomaly_multiplier : float, optional
        Standard deviations beyond which a month is an anomaly.
    duplicate_policy : str
        How rows sharing a calendar month are merged before analysis.
    """

    def __init__(
        self,
        tables: Optional[ReferenceTables] = None,
        horizon: int = 3,
        anomaly_multiplier: Optional[float] = None,
        duplicate_policy: str = "mean",
    ) -> None:
        self.tables = tables or load_reference_tables()
        self.horizon = horizon
        self.anomaly_multiplier = anomaly_multiplier
        self.duplicate_policy = duplicate_policy

        self.seasonality = SeasonalityDetector(self.tables)
        self.growth = GrowthAnalyzer(self.tables)
        self.forecaster = ForecastGenerator(self.tables)
        self.anomalies = AnomalyDetector(self.tables)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TrendAnalyzer":
        """Build an analyzer configured from environment settings."""
        settings = settings or get_settings()
        return cls(
            tables=load_reference_tables(settings.reference_tables_path),
            horizon=settings.forecast_horizon,
            anomaly_multiplier=settings.anomaly_std_multiplier,
            duplicate_policy=settings.duplicate_policy,
        )

    # ------------------------------------------------------------------
    # Full analysis
    # ------------------------------------------------------------------

    def analyze(self, points: Iterable[Any], keyword: str = "") -> TrendAnalysis:
        """Analyze a volume series.

        Returns
        -------
        TrendAnalysis
            A fresh report. An empty series yields the default report:
            not seasonal, no growth, empty forecast, confidence 0.
        """
        series = normalize_series(points, self.duplicate_policy)
        if not series:
            logger.debug("No volume data for '{}', returning default analysis", keyword)
            return TrendAnalysis()

        seasonality = self.seasonality.detect(series)
        growth_rate = self.growth.growth_rate(series)
        volatility = self.growth.volatility(series)
        forecast = self.forecaster.generate(
            series, self.horizon, growth_rate, seasonality.is_seasonal
        )
        anomalies = self.anomalies.detect(series, self.anomaly_multiplier)
        pattern = self.seasonality_pattern(seasonality.peak_months, keyword)
        confidence = self.confidence(len(series), volatility, seasonality.is_seasonal)

        logger.debug(
            "Trend analysis for '{}': {} points, pattern={}, growth={}%, confidence={}",
            keyword, len(series), pattern.value, growth_rate, confidence,
        )

        return TrendAnalysis(
            is_seasonal=seasonality.is_seasonal,
            peak_months=seasonality.peak_months,
            low_months=seasonality.low_months,
            growth_rate=growth_rate,
            forecast=forecast,
            seasonality_pattern=pattern,
            confidence=confidence,
            volatility=volatility,
            anomalies=anomalies,
        )

    # ------------------------------------------------------------------
    # Scoring helpers
    # ------------------------------------------------------------------

    def confidence(self, data_points: int, volatility: int, is_seasonal: bool) -> int:
        """Confidence in the analysis (0-100).

        Up to 40 points for data depth (24 months or more), up to 30 for low
        volatility, 20 if seasonal else 10, and a fixed 10 for recency.
        """
        weights = self.tables.analysis_confidence
        depth = min(data_points / weights.depth_months, 1) * weights.depth_points
        consistency = max(0, weights.consistency_points - volatility / weights.volatility_divisor)
        seasonal = weights.seasonal_points if is_seasonal else weights.non_seasonal_points

        total = depth + consistency + seasonal + weights.recency_points
        return max(0, min(int(round_half_up(total)), 100))

    def seasonality_pattern(
        self,
        peak_months: Sequence[int],
        keyword: str = "",
    ) -> SeasonalityPattern:
        """Name the demand driver behind the peak months."""
        if not peak_months:
            return SeasonalityPattern.STABLE

        lower_keyword = (keyword or "").lower()
        if any(word in lower_keyword for word in self.tables.trending_keywords):
            return SeasonalityPattern.TRENDING

        peaks = set(peak_months)

        def _overlaps(*patterns: str) -> bool:
            return any(peaks & set(self.tables.calendar_months(p)) for p in patterns)

        if _overlaps("holiday"):
            return SeasonalityPattern.HOLIDAY
        if _overlaps("back_to_school"):
            return SeasonalityPattern.EVENT
        if _overlaps("summer", "new_year"):
            return SeasonalityPattern.WEATHER

        return SeasonalityPattern.EVENT if len(peaks) >= 3 else SeasonalityPattern.STABLE

    # ------------------------------------------------------------------
    # Series utilities
    # ------------------------------------------------------------------

    def smooth(self, points: Iterable[Any], window_size: int = 3) -> VolumeSeries:
        """Centred moving average over the normalized series.

        Series shorter than *window_size* are returned unchanged.
        """
        series = normalize_series(points, self.duplicate_policy)
        if window_size < 1 or len(series) < window_size:
            return series

        smoothed = []
        for index, point in enumerate(series):
            start = max(0, index - window_size // 2)
            end = min(len(series), start + window_size)
            window = series[start:end]
            smoothed.append(MonthlyVolumePoint(
                year=point.year,
                month=point.month,
                search_volume=int(round_half_up(mean(p.search_volume for p in window))),
            ))
        return tuple(smoothed)

    def compare(
        self,
        current: Iterable[Any],
        historical: Iterable[Any],
    ) -> TrendComparison:
        """Compare average volume of a current period with a historical one."""
        current_series = normalize_series(current, self.duplicate_policy)
        historical_series = normalize_series(historical, self.duplicate_policy)

        if not current_series or not historical_series:
            return TrendComparison(
                current_average=0,
                historical_average=0,
                percent_change=0,
                interpretation="Insufficient data for comparison",
            )

        current_avg = int(round_half_up(mean(p.search_volume for p in current_series)))
        historical_avg = int(round_half_up(mean(p.search_volume for p in historical_series)))

        percent_change = 0
        if historical_avg > 0:
            percent_change = int(round_half_up(
                (current_avg - historical_avg) / historical_avg * 100
            ))

        interpretation = _COMPARISON_FLOOR
        for bound, text in _COMPARISON_BANDS:
            if percent_change > bound:
                interpretation = text
                break

        return TrendComparison(
            current_average=current_avg,
            historical_average=historical_avg,
            percent_change=percent_change,
            interpretation=interpretation,
        )
