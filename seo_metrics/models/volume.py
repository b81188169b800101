"""Monthly search-volume points and series normalization."""

from collections import OrderedDict
from typing import Any, Iterable, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import InvalidInputError
from ..utils.statistics import round_half_up

DUPLICATE_POLICIES = ("mean", "sum", "last")


class MonthlyVolumePoint(BaseModel):
    """Search volume observed for one calendar month."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    year: int = Field(ge=1)
    month: int = Field(ge=1, le=12)
    search_volume: int = Field(ge=0, alias="searchVolume")

    @property
    def period(self) -> Tuple[int, int]:
        return self.year, self.month

    @classmethod
    def parse(cls, raw: Any) -> "MonthlyVolumePoint":
        """Coerce a point, mapping, or ``(year, month, volume)`` tuple.

        Raises:
            InvalidInputError: if the value cannot be coerced.
        """
        if isinstance(raw, cls):
            return raw

        try:
            if isinstance(raw, dict):
                return cls.model_validate(raw)
            if isinstance(raw, (tuple, list)) and len(raw) == 3:
                year, month, volume = raw
                return cls(year=year, month=month, search_volume=volume)
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid monthly volume point {raw!r}: {exc}") from exc

        raise InvalidInputError(f"Cannot interpret {raw!r} as a monthly volume point")

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "search_volume": self.search_volume,
        }


VolumeSeries = Tuple[MonthlyVolumePoint, ...]


def _merge(points: list, policy: str) -> MonthlyVolumePoint:
    first = points[0]
    if policy == "last":
        return points[-1]

    total = sum(p.search_volume for p in points)
    if policy == "sum":
        volume = total
    else:
        volume = int(round_half_up(total / len(points)))
    return MonthlyVolumePoint(year=first.year, month=first.month, search_volume=volume)


def normalize_series(
    points: Iterable[Any],
    duplicate_policy: str = "mean",
) -> VolumeSeries:
    """Validate, deduplicate and chronologically sort a volume series.

    Rows sharing a ``(year, month)`` are merged by *duplicate_policy*:

    - ``"mean"``: average volume, rounded half-up
    - ``"sum"``: total volume
    - ``"last"``: the last row supplied wins

    Normalizing an already normalized series returns an equal series.

    Raises:
        InvalidInputError: on a malformed point or unknown policy.
    """
    if duplicate_policy not in DUPLICATE_POLICIES:
        raise InvalidInputError(
            f"Unknown duplicate policy {duplicate_policy!r}; "
            f"expected one of {', '.join(DUPLICATE_POLICIES)}"
        )
    if points is None:
        return ()

    grouped: "OrderedDict[Tuple[int, int], list]" = OrderedDict()
    count = 0
    for raw in points:
        point = MonthlyVolumePoint.parse(raw)
        grouped.setdefault(point.period, []).append(point)
        count += 1

    duplicates = count - len(grouped)
    if duplicates:
        logger.debug(
            "Merged {} duplicate month rows using policy '{}'",
            duplicates, duplicate_policy,
        )

    return tuple(
        _merge(group, duplicate_policy)
        for _, group in sorted(grouped.items())
    )
