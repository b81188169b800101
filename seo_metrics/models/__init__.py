"""Data models for the SEO Metrics engine."""

from .keyword import (
    BuyingStage,
    Device,
    DifficultyEstimate,
    IntentAnalysis,
    KeywordAttributes,
    KeywordValue,
    OpportunityMatrix,
    OpportunityQuadrant,
    OpportunityWindow,
    Priority,
    SearchIntent,
    SerpFeatureImpact,
    SerpResult,
    SerpVolatility,
    TrafficPotential,
)
from .reference import ReferenceTables
from .trend import (
    Anomaly,
    AnomalyType,
    MonthlyForecast,
    SeasonalityPattern,
    SeasonalityResult,
    TrendAnalysis,
    TrendComparison,
    TrendDirection,
)
from .volume import MonthlyVolumePoint, VolumeSeries, normalize_series

__all__ = [
    "Anomaly",
    "AnomalyType",
    "BuyingStage",
    "Device",
    "DifficultyEstimate",
    "IntentAnalysis",
    "KeywordAttributes",
    "KeywordValue",
    "MonthlyForecast",
    "MonthlyVolumePoint",
    "OpportunityMatrix",
    "OpportunityQuadrant",
    "OpportunityWindow",
    "Priority",
    "ReferenceTables",
    "SearchIntent",
    "SeasonalityPattern",
    "SeasonalityResult",
    "SerpFeatureImpact",
    "SerpResult",
    "SerpVolatility",
    "TrafficPotential",
    "TrendAnalysis",
    "TrendComparison",
    "TrendDirection",
    "VolumeSeries",
    "normalize_series",
]
