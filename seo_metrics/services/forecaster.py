"""
Search-volume forecasting.

Projects future monthly volumes from a recent baseline compounded by the
monthly share of the year-over-year growth rate, optionally shaped by the
historical weight of each calendar month.
"""

from typing import Any, Iterable, Optional, Sequence, Tuple

from loguru import logger

from ..config import load_reference_tables
from ..exceptions import InvalidInputError
from ..models.reference import ReferenceTables
from ..models.trend import MonthlyForecast, TrendDirection
from ..models.volume import MonthlyVolumePoint, normalize_series
from ..utils.statistics import mean, round_half_up


class ForecastGenerator:
    """Generates month-by-month forecasts with decaying confidence."""

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    def trend_for(self, growth_rate: float) -> TrendDirection:
        """Trend label shared by every step of a forecast run."""
        threshold = self.tables.forecast.trend_threshold
        if growth_rate > threshold:
            return TrendDirection.UP
        if growth_rate < -threshold:
            return TrendDirection.DOWN
        return TrendDirection.STABLE

    def confidence_for(self, step: int) -> int:
        """Confidence for the forecast *step* months ahead (1-indexed)."""
        settings = self.tables.forecast
        return max(
            settings.confidence_floor,
            settings.confidence_start - settings.confidence_step * step,
        )

    @staticmethod
    def seasonal_factor(month: int, series: Sequence[MonthlyVolumePoint]) -> float:
        """Average volume of *month* relative to the average of the series.

        Returns 1.0 when the month has no history or the series averages 0.
        """
        month_volumes = [p.search_volume for p in series if p.month == month]
        if not month_volumes:
            return 1.0

        overall = mean(p.search_volume for p in series)
        if overall == 0:
            return 1.0
        return mean(month_volumes) / overall

    def generate(
        self,
        series: Iterable[Any],
        horizon: int = 3,
        growth_rate: float = 0.0,
        is_seasonal: bool = False,
    ) -> Tuple[MonthlyForecast, ...]:
        """Forecast the *horizon* months following the last observed month.

        Raises:
            InvalidInputError: if *horizon* is negative.
        """
        if horizon < 0:
            raise InvalidInputError(f"Forecast horizon must be >= 0, got {horizon}")

        series = normalize_series(series)
        if not series:
            return ()

        window = self.tables.forecast.baseline_window
        baseline = mean(p.search_volume for p in series[-window:])
        growth_factor = 1 + growth_rate / 100 / 12
        trend = self.trend_for(growth_rate)
        last = series[-1]

        forecast = []
        for step in range(1, horizon + 1):
            year, month = divmod(last.month - 1 + step, 12)
            year += last.year
            month += 1

            predicted = baseline * growth_factor ** step
            if is_seasonal:
                predicted *= self.seasonal_factor(month, series)

            forecast.append(MonthlyForecast(
                year=year,
                month=month,
                predicted_volume=max(int(round_half_up(predicted)), 0),
                confidence=self.confidence_for(step),
                trend=trend,
            ))

        logger.debug(
            "Forecast from {}-{:02d}: baseline={:.1f} growth={}% steps={}",
            last.year, last.month, baseline, growth_rate, horizon,
        )
        return tuple(forecast)
