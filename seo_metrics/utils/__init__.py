"""Utility modules for the SEO Metrics engine."""

from .statistics import (
    coefficient_of_variation,
    mean,
    round_half_up,
    stddev,
    variance,
)

__all__ = [
    "coefficient_of_variation",
    "mean",
    "round_half_up",
    "stddev",
    "variance",
]
