"""Keyword value and opportunity scoring."""

import math
from typing import Any, Optional

from loguru import logger

from ..config import load_reference_tables
from ..exceptions import InvalidInputError
from ..models.keyword import (
    KeywordAttributes,
    KeywordValue,
    OpportunityMatrix,
    OpportunityQuadrant,
    Priority,
)
from ..models.reference import ReferenceTables
from ..utils.statistics import round_half_up

# Monthly value treated as the top of the 0-100 value axis
MATRIX_VALUE_CEILING = 1000.0

_QUADRANT_RECOMMENDATIONS = {
    OpportunityQuadrant.QUICK_WINS: "High priority target - High value with low difficulty. Start here!",
    OpportunityQuadrant.LONG_TERM: "Long-term investment - High value but competitive. Plan sustained effort.",
    OpportunityQuadrant.LOW_PRIORITY: "Low priority - Easy to rank but limited value. Consider if aligned with strategy.",
    OpportunityQuadrant.HARD_TARGETS: "Avoid - Low value and high difficulty. Better opportunities exist.",
}


class KeywordValueScorer:
    """
    Estimates what ranking #1 for a keyword is worth.

    Clicks are estimated with the position-1 desktop CTR, valued at the
    keyword's CPC, and weighed against difficulty to produce an opportunity
    score and priority tier.
    """

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    @property
    def position_one_ctr(self) -> float:
        return self.tables.ctr_desktop[1]

    def opportunity_score(
        self,
        monthly_value: float,
        search_volume: float,
        difficulty: float,
    ) -> float:
        """Weighted value and volume per point of difficulty."""
        weights = self.tables.opportunity_weights
        numerator = (
            weights.value_weight * monthly_value
            + weights.volume_weight * search_volume
        )
        return max(numerator / max(difficulty + weights.difficulty_offset, 1), 0.0)

    def priority_for(self, score: float) -> Priority:
        """Priority tier for an opportunity score."""
        ranges = self.tables.opportunity_score_ranges
        if score >= ranges["high"]:
            return Priority.HIGH
        if score >= ranges["medium"]:
            return Priority.MEDIUM
        return Priority.LOW

    def score(self, attributes: Any) -> KeywordValue:
        """Score a keyword.

        Args:
            attributes: ``KeywordAttributes`` or a mapping with
                ``search_volume``, ``cpc`` and ``keyword_difficulty``.

        Raises:
            InvalidInputError: if the attributes are malformed.
        """
        attrs = KeywordAttributes.parse(attributes)

        estimated_clicks = int(round_half_up(attrs.search_volume * self.position_one_ctr))
        monthly_value = round_half_up(estimated_clicks * attrs.cpc, 2)
        score = self.opportunity_score(monthly_value, attrs.search_volume, attrs.keyword_difficulty)
        priority = self.priority_for(score)

        logger.debug(
            "Keyword value '{}': clicks={} value={} score={:.1f} priority={}",
            attrs.keyword, estimated_clicks, monthly_value, score, priority.value,
        )

        return KeywordValue(
            monthly_value=monthly_value,
            opportunity_score=score,
            priority=priority,
            estimated_clicks=estimated_clicks,
            search_volume=attrs.search_volume,
            cpc=attrs.cpc,
            difficulty=attrs.keyword_difficulty,
        )

    def opportunity_matrix(self, value: float, difficulty: float) -> OpportunityMatrix:
        """Place a keyword on the value / difficulty matrix.

        Raises:
            InvalidInputError: if *value* or *difficulty* is not finite.
        """
        if not (math.isfinite(value) and math.isfinite(difficulty)):
            raise InvalidInputError(f"Value and difficulty must be finite, got {value}, {difficulty}")
        difficulty = min(max(difficulty, 0), 100)
        normalized = min(max(value, 0) / MATRIX_VALUE_CEILING * 100, 100)

        high_value = normalized >= 50
        easy = difficulty <= 50
        if high_value and easy:
            quadrant = OpportunityQuadrant.QUICK_WINS
        elif high_value:
            quadrant = OpportunityQuadrant.LONG_TERM
        elif easy:
            quadrant = OpportunityQuadrant.LOW_PRIORITY
        else:
            quadrant = OpportunityQuadrant.HARD_TARGETS

        return OpportunityMatrix(
            quadrant=quadrant,
            normalized_value=normalized,
            difficulty=difficulty,
            score=int(round_half_up(normalized * 0.6 + (100 - difficulty) * 0.4)),
            recommendation=_QUADRANT_RECOMMENDATIONS[quadrant],
        )
