"""Spike and drop detection in historical search volumes."""

from typing import Any, Iterable, Optional, Tuple

from loguru import logger

from ..config import load_reference_tables
from ..exceptions import InvalidInputError
from ..models.reference import ReferenceTables
from ..models.trend import Anomaly, AnomalyType
from ..models.volume import normalize_series
from ..utils.statistics import mean, stddev


class AnomalyDetector:
    """Flags months deviating from the mean by more than N standard deviations."""

    def __init__(self, tables: Optional[ReferenceTables] = None):
        self.tables = tables or load_reference_tables()

    def detect(
        self,
        series: Iterable[Any],
        multiplier: Optional[float] = None,
    ) -> Tuple[Anomaly, ...]:
        """Return anomalous points in chronological order.

        Needs at least 6 points. A constant series never has anomalies.

        Raises:
            InvalidInputError: if *multiplier* is negative.
        """
        settings = self.tables.anomaly
        if multiplier is None:
            multiplier = settings.std_multiplier
        if multiplier < 0:
            raise InvalidInputError(f"Standard deviation multiplier must be >= 0, got {multiplier}")

        series = normalize_series(series)
        if len(series) < settings.min_points:
            return ()

        volumes = [p.search_volume for p in series]
        avg = mean(volumes)
        threshold = stddev(volumes) * multiplier

        anomalies = tuple(
            Anomaly(
                year=p.year,
                month=p.month,
                volume=p.search_volume,
                type=AnomalyType.SPIKE if p.search_volume > avg else AnomalyType.DROP,
            )
            for p in series
            if abs(p.search_volume - avg) > threshold
        )

        if anomalies:
            logger.debug("Found {} anomalies (threshold={:.1f})", len(anomalies), threshold)
        return anomalies
