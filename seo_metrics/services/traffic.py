"""Organic traffic potential from position-based CTR curves."""

import math
from typing import Iterable, Optional

from ..config import load_reference_tables
from ..exceptions import InvalidInputError
from ..models.keyword import Device, SerpFeatureImpact, TrafficPotential
from ..models.reference import ReferenceTables
from ..utils.statistics import round_half_up


def _feature_key(feature: str) -> str:
    return "_".join(feature.lower().split())


class TrafficEstimator:
    """Estimates clicks at a SERP position, adjusted for SERP features."""

    # Positions past the end of the desktop curve use its last entry
    MAX_POSITION = 20

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    def base_ctr(self, position: int, device: Device = Device.DESKTOP) -> float:
        curve = self.tables.ctr_curve(Device(device).value)
        return curve.get(min(position, self.MAX_POSITION), self.tables.fallback_ctr)

    def feature_impacts(self, serp_features: Iterable[str]) -> tuple:
        """Known SERP features with their CTR impact; unknown ones are ignored."""
        impacts = []
        for feature in serp_features:
            impact = self.tables.serp_feature_ctr_impact.get(_feature_key(feature))
            if impact is None:
                continue
            if impact > 0:
                explanation = f"+{impact * 100:.0f}% if you own it"
            else:
                explanation = f"{impact * 100:.0f}% CTR reduction"
            impacts.append(SerpFeatureImpact(feature=feature, impact=impact, explanation=explanation))
        return tuple(impacts)

    def estimate(
        self,
        position: int,
        search_volume: float,
        serp_features: Iterable[str] = (),
        device: Device = Device.DESKTOP,
        brand_boost: bool = False,
    ) -> TrafficPotential:
        """Estimate monthly clicks for *search_volume* at *position*.

        Raises:
            InvalidInputError: on a position below 1, a negative or non-finite
                volume, or an unknown device.
        """
        if position < 1:
            raise InvalidInputError(f"Position must be >= 1, got {position}")
        if not math.isfinite(search_volume) or search_volume < 0:
            raise InvalidInputError(f"Search volume must be a finite number >= 0, got {search_volume}")
        try:
            device = Device(device)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown device {device!r}") from exc

        impacts = self.feature_impacts(serp_features)
        ctr = self.base_ctr(position, device) * (1 + sum(i.impact for i in impacts))

        boost = self.tables.brand_ctr_boost if brand_boost else 0.0
        ctr *= 1 + boost
        ctr = min(max(ctr, 0.0), self.tables.max_ctr)

        return TrafficPotential(
            position=position,
            search_volume=search_volume,
            ctr=ctr,
            estimated_clicks=int(round_half_up(search_volume * ctr)),
            device=device,
            serp_feature_impact=impacts,
            brand_boost=boost,
        )
