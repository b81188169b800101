"""
SEO Metrics & Forecasting Engine
================================

Turns monthly search-volume series and keyword attributes into seasonality
and trend reports, forecasts, anomaly lists, keyword value estimates and
search intent classifications. Every analyzer is a pure function of its
inputs and the injected reference tables.
"""

__version__ = "1.0.0"
__author__ = "Common Notary"

from seo_metrics.config import load_reference_tables
from seo_metrics.exceptions import InvalidInputError
from seo_metrics.models import (
    KeywordAttributes,
    MonthlyVolumePoint,
    ReferenceTables,
    normalize_series,
)
from seo_metrics.services import (
    AnomalyDetector,
    DifficultyEstimator,
    ForecastGenerator,
    GrowthAnalyzer,
    IntentClassifier,
    KeywordValueScorer,
    SeasonalityDetector,
    TrafficEstimator,
    TrendAnalyzer,
)

__all__ = [
    "AnomalyDetector",
    "DifficultyEstimator",
    "ForecastGenerator",
    "GrowthAnalyzer",
    "IntentClassifier",
    "InvalidInputError",
    "KeywordAttributes",
    "KeywordValueScorer",
    "MonthlyVolumePoint",
    "ReferenceTables",
    "SeasonalityDetector",
    "TrafficEstimator",
    "TrendAnalyzer",
    "load_reference_tables",
    "normalize_series",
]
