"""Trend analysis result objects."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class SeasonalityPattern(str, Enum):
    """Demand driver behind a keyword's peak months."""
    STABLE = "stable"
    HOLIDAY = "holiday"
    EVENT = "event"
    WEATHER = "weather"
    TRENDING = "trending"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class AnomalyType(str, Enum):
    SPIKE = "spike"
    DROP = "drop"


@dataclass(frozen=True)
class SeasonalityResult:
    """Outcome of seasonality detection for one series."""
    is_seasonal: bool
    peak_months: Tuple[int, ...] = ()
    low_months: Tuple[int, ...] = ()
    monthly_averages: Dict[int, float] = field(default_factory=dict)
    coefficient_of_variation: float = 0.0


@dataclass(frozen=True)
class MonthlyForecast:
    """Predicted search volume for one future month."""
    year: int
    month: int
    predicted_volume: int
    confidence: int
    trend: TrendDirection

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "predicted_volume": self.predicted_volume,
            "confidence": self.confidence,
            "trend": self.trend.value,
        }


@dataclass(frozen=True)
class Anomaly:
    """A historical month whose volume deviates abnormally from the mean."""
    year: int
    month: int
    volume: int
    type: AnomalyType

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "volume": self.volume,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class TrendAnalysis:
    """Full trend report for one keyword's volume series."""
    is_seasonal: bool = False
    peak_months: Tuple[int, ...] = ()
    low_months: Tuple[int, ...] = ()
    growth_rate: float = 0.0
    forecast: Tuple[MonthlyForecast, ...] = ()
    seasonality_pattern: SeasonalityPattern = SeasonalityPattern.STABLE
    confidence: int = 0
    volatility: int = 0
    anomalies: Tuple[Anomaly, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "is_seasonal": self.is_seasonal,
            "peak_months": list(self.peak_months),
            "low_months": list(self.low_months),
            "growth_rate": self.growth_rate,
            "forecast": [f.to_dict() for f in self.forecast],
            "seasonality_pattern": self.seasonality_pattern.value,
            "confidence": self.confidence,
            "volatility": self.volatility,
            "anomalies": [a.to_dict() for a in self.anomalies],
        }


@dataclass(frozen=True)
class TrendComparison:
    """Average volume of a current period against a historical one."""
    current_average: int
    historical_average: int
    percent_change: int
    interpretation: str

    def to_dict(self) -> dict:
        return {
            "current_average": self.current_average,
            "historical_average": self.historical_average,
            "percent_change": self.percent_change,
            "interpretation": self.interpretation,
        }
