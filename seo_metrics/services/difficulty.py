"""Keyword difficulty from SERP competition, and SERP volatility."""

import math
from typing import Any, Iterable, Optional

from ..config import load_reference_tables
from ..exceptions import InvalidInputError
from ..models.keyword import (
    DifficultyEstimate,
    OpportunityWindow,
    SerpResult,
    SerpVolatility,
)
from ..models.reference import ReferenceTables
from ..utils.statistics import mean, round_half_up

# Defaults for SERP results missing a metric
DEFAULT_DOMAIN_AUTHORITY = 50
DEFAULT_CONTENT_LENGTH = 1500
DEFAULT_BASE_KD = 50

# Normalization ceilings for the sub-scores
BACKLINK_LOG_CEILING = 5      # 100k backlinks scores 100
CONTENT_LENGTH_CEILING = 3000
SERP_FEATURE_CEILING = 8


class DifficultyEstimator:
    """
    Composite keyword difficulty and SERP volatility.

    Difficulty blends five 0-100 sub-scores with the KD weights from the
    reference tables: domain authority, log-scaled backlinks, content
    length, distinct SERP features, and a provided base difficulty.
    """

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    def band_for(self, score: float):
        """Difficulty band (label, description, competition) for a score."""
        bands = sorted(self.tables.kd_ranges.values(), key=lambda b: b.max)
        for band in bands:
            if score <= band.max:
                return band
        return bands[-1]

    def estimate(
        self,
        serp_results: Iterable[Any],
        base_kd: Optional[float] = None,
    ) -> DifficultyEstimate:
        """Estimate difficulty from the top-ranking results.

        Raises:
            InvalidInputError: if a result cannot be parsed
                or *base_kd* is not finite.
        """
        if base_kd is not None and not math.isfinite(base_kd):
            raise InvalidInputError(f"Base difficulty must be finite, got {base_kd}")

        try:
            results = [
                r if isinstance(r, SerpResult) else SerpResult.model_validate(r)
                for r in serp_results or ()
            ]
        except ValueError as exc:
            raise InvalidInputError(f"Invalid SERP result: {exc}") from exc

        avg_da = mean(
            r.domain_authority if r.domain_authority is not None else DEFAULT_DOMAIN_AUTHORITY
            for r in results
        ) if results else 0.0
        avg_backlinks = mean(r.backlinks or 0 for r in results)
        avg_length = mean(
            r.content_length if r.content_length is not None else DEFAULT_CONTENT_LENGTH
            for r in results
        ) if results else 0.0
        features = {f for r in results for f in r.serp_features}

        breakdown = {
            "domain_authority": min(avg_da, 100),
            "avg_backlinks": min(math.log10(avg_backlinks + 1) / BACKLINK_LOG_CEILING * 100, 100),
            "content_quality": min(avg_length / CONTENT_LENGTH_CEILING * 100, 100),
            "serp_features": min(len(features) / SERP_FEATURE_CEILING * 100, 100),
            "rank_volatility": min(max(base_kd if base_kd is not None else DEFAULT_BASE_KD, 0), 100),
        }

        weights = self.tables.kd_weights.model_dump()
        overall = int(round_half_up(sum(breakdown[k] * weights[k] for k in breakdown)))
        overall = min(max(overall, 0), 100)
        band = self.band_for(overall)

        return DifficultyEstimate(
            overall_score=overall,
            breakdown=breakdown,
            label=band.label,
            description=band.description,
            competition_level=band.competition,
        )

    def serp_volatility(self, historical_changes: int, period_days: int = 90) -> SerpVolatility:
        """Score how often rankings change for a SERP.

        Raises:
            InvalidInputError: on negative changes or a non-positive period.
        """
        if historical_changes < 0:
            raise InvalidInputError(f"Historical changes must be >= 0, got {historical_changes}")
        if period_days <= 0:
            raise InvalidInputError(f"Period must be > 0 days, got {period_days}")

        changes_per_week = historical_changes / period_days * 7
        score = min(int(round_half_up(changes_per_week * 20)), 100)
        churn = min(int(round_half_up(historical_changes)), 100)

        bands = sorted(self.tables.volatility_thresholds.values(), key=lambda b: b.max)
        band = next((b for b in bands if score <= b.max), bands[-1])

        return SerpVolatility(
            volatility_score=score,
            ranking_churn_rate=churn,
            opportunity_window=OpportunityWindow(band.window),
            label=band.label,
            description=band.description,
            historical_changes=historical_changes,
        )
