"""
Statistics primitives shared by every analyzer.

All functions accept any iterable of numbers and never raise on empty input:
they return 0 instead. Variance is the population variance (divide by N),
which every call site in the engine relies on.
"""

import math
from typing import Iterable, Sequence


def _as_list(values: Iterable[float]) -> Sequence[float]:
    return values if isinstance(values, (list, tuple)) else list(values)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0 for an empty input."""
    values = _as_list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def variance(values: Iterable[float]) -> float:
    """Population variance, 0 for an empty input."""
    values = _as_list(values)
    if not values:
        return 0.0
    avg = mean(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


def stddev(values: Iterable[float]) -> float:
    """Population standard deviation."""
    return math.sqrt(variance(values))


def coefficient_of_variation(values: Iterable[float]) -> float:
    """Standard deviation divided by the mean.

    Returns 0 for an empty input or when the mean is 0.
    """
    values = _as_list(values)
    avg = mean(values)
    if avg == 0:
        return 0.0
    return stddev(values) / avg


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going towards positive infinity.

    Python's ``round`` uses banker's rounding; volumes and scores in the
    engine round 2.5 to 3 and -2.5 to -2.
    """
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return rounded if digits else float(int(rounded))
