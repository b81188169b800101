"""Configuration management and reference tables for the SEO Metrics engine."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from .exceptions import InvalidInputError
from .models.reference import ReferenceTables


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL"
    )
    log_file: str = Field(
        default="logs/seo_metrics.log",
        alias="LOG_FILE"
    )

    # Analysis defaults
    forecast_horizon: int = Field(
        default=3,
        ge=0,
        alias="FORECAST_HORIZON"
    )
    anomaly_std_multiplier: float = Field(
        default=2.0,
        ge=0,
        alias="ANOMALY_STD_MULTIPLIER"
    )
    duplicate_policy: str = Field(
        default="mean",
        alias="DUPLICATE_POLICY"
    )
    default_device: str = Field(
        default="desktop",
        alias="DEFAULT_DEVICE"
    )

    # Optional JSON file overlaying the built-in reference tables
    reference_tables_path: Optional[str] = Field(
        default=None,
        alias="REFERENCE_TABLES_PATH"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Click-through rate by organic position (desktop, AWR 2024)
CTR_BY_POSITION_DESKTOP = {
    1: 0.316,
    2: 0.158,
    3: 0.103,
    4: 0.073,
    5: 0.058,
    6: 0.047,
    7: 0.040,
    8: 0.034,
    9: 0.030,
    10: 0.027,
    11: 0.024,
    12: 0.021,
    13: 0.019,
    14: 0.017,
    15: 0.015,
    16: 0.014,
    17: 0.013,
    18: 0.012,
    19: 0.011,
    20: 0.010,
}

# Click-through rate by organic position (mobile)
CTR_BY_POSITION_MOBILE = {
    1: 0.283,
    2: 0.142,
    3: 0.093,
    4: 0.066,
    5: 0.052,
    6: 0.042,
    7: 0.036,
    8: 0.031,
    9: 0.027,
    10: 0.024,
}

# Relative CTR change for an organic result when the feature is on the SERP
SERP_FEATURES_CTR_IMPACT = {
    "featured_snippet": 0.20,   # only if you own it
    "people_also_ask": -0.05,
    "local_pack": -0.15,
    "shopping_results": -0.10,
    "video_carousel": -0.08,
    "knowledge_panel": -0.12,
    "image_pack": -0.06,
    "ai_overview": -0.25,
}

# Keyword difficulty sub-score weights (sum to 1.0)
KD_WEIGHTS = {
    "domain_authority": 0.40,
    "avg_backlinks": 0.30,
    "content_quality": 0.15,
    "serp_features": 0.10,
    "rank_volatility": 0.05,
}

# Upper bound (inclusive) of each difficulty band
KD_DIFFICULTY_RANGES = {
    "very_easy": {"max": 20, "label": "Very Easy", "competition": "low",
                  "description": "Low competition, great opportunity"},
    "easy": {"max": 40, "label": "Easy", "competition": "low",
             "description": "Moderate competition, good target"},
    "medium": {"max": 60, "label": "Medium", "competition": "medium",
               "description": "Competitive, requires effort"},
    "hard": {"max": 80, "label": "Hard", "competition": "high",
             "description": "Very competitive, significant effort needed"},
    "very_hard": {"max": 100, "label": "Very Hard", "competition": "very_high",
                  "description": "Extremely competitive, long-term strategy"},
}

# Search intent indicators
INTENT_KEYWORDS = {
    "transactional": [
        "buy", "purchase", "order", "shop", "cart", "price", "cheap",
        "discount", "deal", "coupon", "sale"
    ],
    "commercial": [
        "best", "top", "review", "compare", "vs", "alternative",
        "comparison", "versus"
    ],
    "informational": [
        "how", "what", "why", "when", "where", "guide", "tutorial",
        "learn", "tips"
    ],
    "navigational": [
        "login", "signin", "website", "official", "brand name"
    ],
}

# Points per matched indicator, per intent
INTENT_WEIGHTS = {
    "transactional": 3,
    "commercial": 2,
    "informational": 2,
    "navigational": 3,
}

# CPC signal: intent -> (cpc must exceed, bonus points)
INTENT_CPC_BONUS = {
    "transactional": {"min_cpc": 2.0, "bonus": 2},
    "commercial": {"min_cpc": 1.0, "bonus": 1},
}

INTENT_RECOMMENDATIONS = {
    "transactional": "Create product/sales pages with clear CTAs and pricing",
    "commercial": "Create comparison content, reviews, or buying guides",
    "informational": "Create educational content, tutorials, or guides",
    "navigational": "Optimize brand pages and improve site navigation",
}

# Buying stage indicators, checked decision first
BUYING_STAGE_KEYWORDS = {
    "awareness": ["what is", "how to", "guide", "tips", "ideas", "examples"],
    "consideration": ["best", "top", "review", "compare", "vs", "alternative"],
    "decision": ["buy", "price", "discount", "coupon", "deal", "cheap", "order"],
}

URGENCY_KEYWORDS = ["now", "today", "urgent", "fast", "quick", "immediately"]

# Calendar months grouped by demand driver
SEASONALITY_PATTERNS = {
    "holiday": [11, 12],
    "back_to_school": [8, 9],
    "summer": [6, 7, 8],
    "new_year": [1],
    "spring": [3, 4, 5],
}

# Keyword substrings that mark a query as news/trend driven
TRENDING_KEYWORDS = ["news", "trend"]

# SERP volatility bands (inclusive upper bounds)
VOLATILITY_THRESHOLDS = {
    "stable": {"max": 20, "window": "locked", "label": "Stable",
               "description": "Rankings are stable - established players dominate"},
    "moderate": {"max": 50, "window": "competitive", "label": "Moderate",
                 "description": "Some ranking movement - competitive but possible"},
    "high": {"max": 100, "window": "open", "label": "High",
             "description": "High volatility - opportunity to rank quickly"},
}

# Opportunity score thresholds (minimum score per tier)
OPPORTUNITY_SCORE_RANGES = {
    "high": 100,
    "medium": 50,
}

# Opportunity score blend:
#   (value_weight * monthly_value + volume_weight * search_volume)
#   / max(difficulty + difficulty_offset, 1)
OPPORTUNITY_WEIGHTS = {
    "value_weight": 1.0,
    "volume_weight": 0.0,
    "difficulty_offset": 1.0,
}

BRAND_CTR_BOOST = 0.20
MAX_CTR = 0.50
FALLBACK_CTR = 0.01

SEASONALITY_THRESHOLDS = {
    "min_points": 12,
    "peak_ratio": 0.20,
    "min_peak_months": 2,
    "cv_threshold": 0.25,
}

GROWTH_SETTINGS = {
    "window": 12,
}

FORECAST_SETTINGS = {
    "baseline_window": 6,
    "confidence_start": 90,
    "confidence_step": 10,
    "confidence_floor": 50,
    "trend_threshold": 5.0,
}

ANOMALY_SETTINGS = {
    "min_points": 6,
    "std_multiplier": 2.0,
}

# Weights of the trend-analysis confidence score (max 100)
ANALYSIS_CONFIDENCE = {
    "depth_points": 40,
    "depth_months": 24,
    "consistency_points": 30,
    "volatility_divisor": 3,
    "seasonal_points": 20,
    "non_seasonal_points": 10,
    "recency_points": 10,
}

INTENT_SETTINGS = {
    "unmatched_confidence": 30,
    "urgent_score": 80,
    "transactional_urgency": 60,
    "default_urgency": 30,
}


def _default_tables() -> dict:
    return {
        "ctr_desktop": CTR_BY_POSITION_DESKTOP,
        "ctr_mobile": CTR_BY_POSITION_MOBILE,
        "serp_feature_ctr_impact": SERP_FEATURES_CTR_IMPACT,
        "kd_weights": KD_WEIGHTS,
        "kd_ranges": KD_DIFFICULTY_RANGES,
        "intent_keywords": INTENT_KEYWORDS,
        "intent_weights": INTENT_WEIGHTS,
        "intent_cpc_bonus": INTENT_CPC_BONUS,
        "intent_recommendations": INTENT_RECOMMENDATIONS,
        "buying_stage_keywords": BUYING_STAGE_KEYWORDS,
        "urgency_keywords": URGENCY_KEYWORDS,
        "seasonality_patterns": SEASONALITY_PATTERNS,
        "trending_keywords": TRENDING_KEYWORDS,
        "volatility_thresholds": VOLATILITY_THRESHOLDS,
        "opportunity_score_ranges": OPPORTUNITY_SCORE_RANGES,
        "opportunity_weights": OPPORTUNITY_WEIGHTS,
        "brand_ctr_boost": BRAND_CTR_BOOST,
        "max_ctr": MAX_CTR,
        "fallback_ctr": FALLBACK_CTR,
        "seasonality": SEASONALITY_THRESHOLDS,
        "growth": GROWTH_SETTINGS,
        "forecast": FORECAST_SETTINGS,
        "anomaly": ANOMALY_SETTINGS,
        "analysis_confidence": ANALYSIS_CONFIDENCE,
        "intent": INTENT_SETTINGS,
    }


def build_reference_tables(overrides: Optional[dict] = None) -> ReferenceTables:
    """Build reference tables from the defaults, overlaying *overrides*.

    Overrides replace whole top-level tables, except that nested dictionaries
    are merged one level deep so a single weight can be tuned on its own.
    """
    data = _default_tables()
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(data.get(key), dict):
            data[key] = {**data[key], **value}
        else:
            data[key] = value

    try:
        return ReferenceTables.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid reference tables: {exc}") from exc


@lru_cache(maxsize=None)
def load_reference_tables(path: Optional[str] = None) -> ReferenceTables:
    """Load the reference tables, optionally overlaid by a JSON file.

    The result is immutable and cached per *path*, so every analyzer built
    without explicit tables shares the same instance.
    """
    if path is None:
        path = get_settings().reference_tables_path

    overrides = None
    if path:
        logger.info("Loading reference table overrides from {}", path)
        try:
            overrides = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise InvalidInputError(f"Cannot read reference tables from {path}: {exc}") from exc

    return build_reference_tables(overrides)
