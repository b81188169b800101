"""Keyword attribute inputs and scoring result objects."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import InvalidInputError


class Priority(str, Enum):
    """Opportunity priority tier."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SearchIntent(str, Enum):
    INFORMATIONAL = "informational"
    NAVIGATIONAL = "navigational"
    COMMERCIAL = "commercial"
    TRANSACTIONAL = "transactional"


class BuyingStage(str, Enum):
    AWARENESS = "awareness"
    CONSIDERATION = "consideration"
    DECISION = "decision"


class Device(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"


class OpportunityQuadrant(str, Enum):
    QUICK_WINS = "quick_wins"
    LONG_TERM = "long_term"
    LOW_PRIORITY = "low_priority"
    HARD_TARGETS = "hard_targets"


class OpportunityWindow(str, Enum):
    LOCKED = "locked"
    COMPETITIVE = "competitive"
    OPEN = "open"


def _clamp_score(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return min(max(value, 0), 100)
    return value


class KeywordAttributes(BaseModel):
    """Per-keyword metrics supplied by the data source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    keyword: str = ""
    search_volume: float = Field(ge=0, alias="searchVolume")
    cpc: float = Field(default=0.0, ge=0)
    keyword_difficulty: float = Field(default=0.0, alias="keywordDifficulty")

    @field_validator("keyword_difficulty", mode="after")
    @classmethod
    def _clamp_difficulty(cls, value: float) -> float:
        return _clamp_score(value)

    @classmethod
    def parse(cls, raw: Any) -> "KeywordAttributes":
        """Coerce a mapping into attributes.

        Raises:
            InvalidInputError: on negative volume or CPC, or non-numeric values.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, dict):
            raise InvalidInputError(f"Cannot interpret {raw!r} as keyword attributes")
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid keyword attributes: {exc}") from exc


class SerpResult(BaseModel):
    """One organic result on a SERP, as far as difficulty scoring cares."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    url: str = ""
    domain_authority: Optional[float] = Field(default=None, ge=0, le=100, alias="domainAuthority")
    backlinks: Optional[int] = Field(default=None, ge=0)
    content_length: Optional[int] = Field(default=None, ge=0, alias="contentLength")
    serp_features: Tuple[str, ...] = Field(default=(), alias="serpFeatures")


@dataclass(frozen=True)
class KeywordValue:
    """Monetary value and opportunity of ranking #1 for a keyword."""
    monthly_value: float
    opportunity_score: float
    priority: Priority
    estimated_clicks: int
    search_volume: float = 0.0
    cpc: float = 0.0
    difficulty: float = 0.0

    def to_dict(self) -> dict:
        return {
            "monthly_value": self.monthly_value,
            "opportunity_score": self.opportunity_score,
            "priority": self.priority.value,
            "estimated_clicks": self.estimated_clicks,
            "search_volume": self.search_volume,
            "cpc": self.cpc,
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class OpportunityMatrix:
    quadrant: OpportunityQuadrant
    normalized_value: float
    difficulty: float
    score: int
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "quadrant": self.quadrant.value,
            "normalized_value": self.normalized_value,
            "difficulty": self.difficulty,
            "score": self.score,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class IntentAnalysis:
    """Search intent and buying stage of a keyword."""
    primary: SearchIntent
    confidence: int
    buying_stage: BuyingStage
    commercial_score: int
    recommendation: str
    urgency: int = 30
    indicators: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        """True when at least one intent indicator was found."""
        return any(self.indicators.values())

    def to_dict(self) -> dict:
        return {
            "primary": self.primary.value,
            "confidence": self.confidence,
            "buying_stage": self.buying_stage.value,
            "commercial_score": self.commercial_score,
            "recommendation": self.recommendation,
            "urgency": self.urgency,
            "indicators": {k: list(v) for k, v in self.indicators.items()},
        }


@dataclass(frozen=True)
class SerpFeatureImpact:
    feature: str
    impact: float
    explanation: str


@dataclass(frozen=True)
class TrafficPotential:
    """Estimated organic clicks for a keyword at a given position."""
    position: int
    search_volume: float
    ctr: float
    estimated_clicks: int
    device: Device
    serp_feature_impact: Tuple[SerpFeatureImpact, ...] = ()
    brand_boost: float = 0.0

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "search_volume": self.search_volume,
            "ctr": self.ctr,
            "estimated_clicks": self.estimated_clicks,
            "device": self.device.value,
            "serp_feature_impact": [
                {"feature": i.feature, "impact": i.impact, "explanation": i.explanation}
                for i in self.serp_feature_impact
            ],
            "brand_boost": self.brand_boost,
        }


@dataclass(frozen=True)
class DifficultyEstimate:
    """Composite keyword difficulty built from the top SERP results."""
    overall_score: int
    breakdown: Dict[str, float]
    label: str
    description: str
    competition_level: str

    def to_dict(self) -> dict:
        return {
            "overall_score": self.overall_score,
            "breakdown": dict(self.breakdown),
            "label": self.label,
            "description": self.description,
            "competition_level": self.competition_level,
        }


@dataclass(frozen=True)
class SerpVolatility:
    volatility_score: int
    ranking_churn_rate: int
    opportunity_window: OpportunityWindow
    label: str
    description: str
    historical_changes: int

    def to_dict(self) -> dict:
        return {
            "volatility_score": self.volatility_score,
            "ranking_churn_rate": self.ranking_churn_rate,
            "opportunity_window": self.opportunity_window.value,
            "label": self.label,
            "description": self.description,
            "historical_changes": self.historical_changes,
        }
