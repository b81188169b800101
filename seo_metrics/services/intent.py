"""Search intent and buying-stage classification."""

import math
from typing import Dict, List, Optional, Tuple

from loguru import logger

from ..config import load_reference_tables
from ..exceptions import InvalidInputError
from ..models.keyword import BuyingStage, IntentAnalysis, SearchIntent
from ..models.reference import ReferenceTables
from ..utils.statistics import round_half_up


class IntentClassifier:
    """
    Classifies keywords by search intent and buying stage.

    Matching is data driven: the indicator dictionaries, weights, CPC bonuses
    and recommendations all come from the reference tables. A keyword that
    matches nothing is informational with low confidence.
    """

    # Evaluation order; a later intent replaces the current best only on a
    # strictly higher score, so informational wins ties.
    INTENT_ORDER = [
        SearchIntent.INFORMATIONAL,
        SearchIntent.TRANSACTIONAL,
        SearchIntent.COMMERCIAL,
        SearchIntent.NAVIGATIONAL,
    ]

    # Buying stages checked from most to least committed
    STAGE_ORDER = [
        BuyingStage.DECISION,
        BuyingStage.CONSIDERATION,
    ]

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    @staticmethod
    def _matches(text: str, terms) -> Tuple[str, ...]:
        return tuple(term for term in terms if term.lower() in text)

    def match_indicators(self, keyword: str) -> Dict[str, Tuple[str, ...]]:
        """Indicator terms of every intent found in *keyword*."""
        text = (keyword or "").lower()
        return {
            intent.value: self._matches(text, self.tables.intent_keywords.get(intent.value, ()))
            for intent in SearchIntent
        }

    def intent_scores(self, indicators: Dict[str, Tuple[str, ...]], cpc: float) -> Dict[str, float]:
        """Weighted indicator counts plus CPC bonuses, per intent."""
        scores = {}
        for intent in SearchIntent:
            weight = self.tables.intent_weights.get(intent.value, 1)
            score = len(indicators.get(intent.value, ())) * weight
            bonus = self.tables.intent_cpc_bonus.get(intent.value)
            if bonus and cpc > bonus.min_cpc:
                score += bonus.bonus
            scores[intent.value] = score
        return scores

    def buying_stage(self, keyword: str) -> BuyingStage:
        text = (keyword or "").lower()
        for stage in self.STAGE_ORDER:
            if self._matches(text, self.tables.buying_stage_keywords.get(stage.value, ())):
                return stage
        return BuyingStage.AWARENESS

    def classify(self, keyword: str, cpc: float = 0.0) -> IntentAnalysis:
        """Classify a keyword.

        Args:
            keyword: Raw query text.
            cpc: Optional cost-per-click signal; higher CPC leans the result
                towards commercial and transactional intent.

        Raises:
            InvalidInputError: if *cpc* is negative or not finite.
        """
        if cpc is None:
            cpc = 0.0
        if not math.isfinite(cpc) or cpc < 0:
            raise InvalidInputError(f"CPC must be a finite number >= 0, got {cpc}")

        settings = self.tables.intent
        indicators = self.match_indicators(keyword)
        scores = self.intent_scores(indicators, cpc)

        primary = self.INTENT_ORDER[0]
        best = scores[primary.value]
        for intent in self.INTENT_ORDER[1:]:
            if scores[intent.value] > best:
                primary = intent
                best = scores[intent.value]

        total = sum(scores.values())
        if total > 0:
            confidence = min(int(round_half_up(best / total * 100)), 100)
        else:
            confidence = settings.unmatched_confidence
            logger.debug("No intent indicators in '{}', defaulting to informational", keyword)

        transactional = scores[SearchIntent.TRANSACTIONAL.value]
        commercial = scores[SearchIntent.COMMERCIAL.value]
        commercial_score = int(round_half_up((transactional * 40 + commercial * 30 + cpc * 10) / 2))
        commercial_score = min(max(commercial_score, 0), 100)

        text = (keyword or "").lower()
        if self._matches(text, self.tables.urgency_keywords):
            urgency = settings.urgent_score
        elif primary is SearchIntent.TRANSACTIONAL:
            urgency = settings.transactional_urgency
        else:
            urgency = settings.default_urgency

        stage = self.buying_stage(keyword)
        logger.debug(
            "Intent for '{}': {} ({}%), stage={}",
            keyword, primary.value, confidence, stage.value,
        )

        return IntentAnalysis(
            primary=primary,
            confidence=confidence,
            buying_stage=stage,
            commercial_score=commercial_score,
            recommendation=self.tables.intent_recommendations.get(primary.value, ""),
            urgency=urgency,
            indicators=indicators,
        )

    def classify_many(self, keywords: List[str]) -> List[IntentAnalysis]:
        """Classify several keywords without a CPC signal."""
        return [self.classify(keyword) for keyword in keywords]
