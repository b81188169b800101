"""Analyzers of the SEO Metrics engine."""

from .anomalies import AnomalyDetector
from .difficulty import DifficultyEstimator
from .forecaster import ForecastGenerator
from .growth import GrowthAnalyzer
from .intent import IntentClassifier
from .keyword_value import KeywordValueScorer
from .seasonality import SeasonalityDetector
from .traffic import TrafficEstimator
from .trend_analyzer import TrendAnalyzer

__all__ = [
    "AnomalyDetector",
    "DifficultyEstimator",
    "ForecastGenerator",
    "GrowthAnalyzer",
    "IntentClassifier",
    "KeywordValueScorer",
    "SeasonalityDetector",
    "TrafficEstimator",
    "TrendAnalyzer",
]
