"""Immutable reference tables injected into every analyzer."""

from types import MappingProxyType
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class KDWeights(_Frozen):
    """Weights of the keyword difficulty sub-scores."""
    domain_authority: float = Field(ge=0)
    avg_backlinks: float = Field(ge=0)
    content_quality: float = Field(ge=0)
    serp_features: float = Field(ge=0)
    rank_volatility: float = Field(ge=0)


class DifficultyBand(_Frozen):
    max: int = Field(ge=0, le=100)
    label: str
    competition: str
    description: str


class VolatilityBand(_Frozen):
    max: int = Field(ge=0, le=100)
    window: str
    label: str
    description: str


class CpcBonus(_Frozen):
    min_cpc: float = Field(ge=0)
    bonus: float = Field(ge=0)


class OpportunityWeights(_Frozen):
    value_weight: float = Field(ge=0)
    volume_weight: float = Field(ge=0)
    difficulty_offset: float = Field(ge=0)


class SeasonalitySettings(_Frozen):
    min_points: int = Field(ge=1)
    peak_ratio: float = Field(ge=0, lt=1)
    min_peak_months: int = Field(ge=1)
    cv_threshold: float = Field(ge=0)


class GrowthSettings(_Frozen):
    window: int = Field(ge=1)


class ForecastSettings(_Frozen):
    baseline_window: int = Field(ge=1)
    confidence_start: int = Field(ge=0, le=100)
    confidence_step: int = Field(ge=0)
    confidence_floor: int = Field(ge=0, le=100)
    trend_threshold: float = Field(ge=0)


class AnomalySettings(_Frozen):
    min_points: int = Field(ge=1)
    std_multiplier: float = Field(ge=0)


class AnalysisConfidenceWeights(_Frozen):
    depth_points: float = Field(ge=0)
    depth_months: int = Field(ge=1)
    consistency_points: float = Field(ge=0)
    volatility_divisor: float = Field(gt=0)
    seasonal_points: float = Field(ge=0)
    non_seasonal_points: float = Field(ge=0)
    recency_points: float = Field(ge=0)


class IntentSettings(_Frozen):
    unmatched_confidence: int = Field(ge=0, le=100)
    urgent_score: int = Field(ge=0, le=100)
    transactional_urgency: int = Field(ge=0, le=100)
    default_urgency: int = Field(ge=0, le=100)


class ReferenceTables(_Frozen):
    """Every constant, curve, dictionary and threshold the engine uses.

    Built once by :func:`seo_metrics.config.load_reference_tables` and passed
    to the analyzers, so weights can be tuned without touching algorithms.
    """

    ctr_desktop: Dict[int, float]
    ctr_mobile: Dict[int, float]
    serp_feature_ctr_impact: Dict[str, float]
    kd_weights: KDWeights
    kd_ranges: Dict[str, DifficultyBand]

    intent_keywords: Dict[str, Tuple[str, ...]]
    intent_weights: Dict[str, float]
    intent_cpc_bonus: Dict[str, CpcBonus]
    intent_recommendations: Dict[str, str]
    buying_stage_keywords: Dict[str, Tuple[str, ...]]
    urgency_keywords: Tuple[str, ...]

    seasonality_patterns: Dict[str, Tuple[int, ...]]
    trending_keywords: Tuple[str, ...]
    volatility_thresholds: Dict[str, VolatilityBand]

    opportunity_score_ranges: Dict[str, float]
    opportunity_weights: OpportunityWeights
    brand_ctr_boost: float = Field(ge=0)
    max_ctr: float = Field(gt=0, le=1)
    fallback_ctr: float = Field(ge=0, le=1)

    seasonality: SeasonalitySettings
    growth: GrowthSettings
    forecast: ForecastSettings
    anomaly: AnomalySettings
    analysis_confidence: AnalysisConfidenceWeights
    intent: IntentSettings

    @model_validator(mode="after")
    def _read_only_tables(self) -> "ReferenceTables":
        # frozen only blocks attribute assignment; lock the tables as well
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, dict):
                object.__setattr__(self, name, MappingProxyType(value))
        return self

    def ctr_curve(self, device: str) -> Dict[int, float]:
        """Return the CTR curve for ``"desktop"`` or ``"mobile"``."""
        return self.ctr_mobile if device == "mobile" else self.ctr_desktop

    def calendar_months(self, pattern: str) -> Tuple[int, ...]:
        return self.seasonality_patterns.get(pattern, ())
