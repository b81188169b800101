"""Tests for input models and series normalization."""

import pytest

from seo_metrics.exceptions import InvalidInputError
from seo_metrics.models.keyword import KeywordAttributes
from seo_metrics.models.volume import MonthlyVolumePoint, normalize_series


class TestMonthlyVolumePoint:
    """Validation at the ingestion boundary."""

    def test_parse_mapping_with_camel_case(self):
        point = MonthlyVolumePoint.parse({"year": 2024, "month": 3, "searchVolume": 500})
        assert point.period == (2024, 3)
        assert point.search_volume == 500

    def test_parse_tuple(self):
        point = MonthlyVolumePoint.parse((2024, 12, 10))
        assert point.month == 12

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_out_of_range(self, month):
        with pytest.raises(InvalidInputError):
            MonthlyVolumePoint.parse({"year": 2024, "month": month, "search_volume": 1})

    def test_negative_volume(self):
        with pytest.raises(InvalidInputError):
            MonthlyVolumePoint.parse({"year": 2024, "month": 1, "search_volume": -5})

    def test_unparseable_value(self):
        with pytest.raises(InvalidInputError):
            MonthlyVolumePoint.parse("2024-01:100")

    def test_invalid_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            MonthlyVolumePoint.parse({"year": 2024, "month": 1, "search_volume": "lots"})

    def test_points_are_immutable(self):
        point = MonthlyVolumePoint(year=2024, month=1, search_volume=1)
        with pytest.raises(Exception):
            point.search_volume = 2


class TestNormalizeSeries:
    """Sorting and duplicate handling."""

    def test_sorts_by_year_then_month(self):
        series = normalize_series([(2024, 2, 1), (2023, 12, 2), (2024, 1, 3)])
        assert [p.period for p in series] == [(2023, 12), (2024, 1), (2024, 2)]

    def test_duplicates_averaged_by_default(self):
        series = normalize_series([(2024, 1, 100), (2024, 1, 201)])
        assert len(series) == 1
        assert series[0].search_volume == 151  # 150.5 rounds up

    def test_duplicates_summed(self):
        series = normalize_series([(2024, 1, 100), (2024, 1, 200)], duplicate_policy="sum")
        assert series[0].search_volume == 300

    def test_duplicates_last_wins(self):
        series = normalize_series([(2024, 1, 100), (2024, 1, 200)], duplicate_policy="last")
        assert series[0].search_volume == 200

    def test_unknown_policy(self):
        with pytest.raises(InvalidInputError):
            normalize_series([(2024, 1, 1)], duplicate_policy="max")

    def test_empty_and_none(self):
        assert normalize_series([]) == ()
        assert normalize_series(None) == ()

    def test_idempotent(self):
        once = normalize_series([(2024, 3, 5), (2024, 1, 7), (2024, 1, 9)])
        assert normalize_series(once) == once


class TestKeywordAttributes:
    """Keyword attribute validation."""

    def test_parse_camel_case(self):
        attrs = KeywordAttributes.parse({
            "keyword": "running shoes",
            "searchVolume": 1200,
            "cpc": 1.5,
            "keywordDifficulty": 35,
        })
        assert attrs.search_volume == 1200
        assert attrs.keyword_difficulty == 35

    def test_difficulty_clamped(self):
        high = KeywordAttributes.parse({"search_volume": 1, "keyword_difficulty": 140})
        low = KeywordAttributes.parse({"search_volume": 1, "keyword_difficulty": -10})
        assert high.keyword_difficulty == 100
        assert low.keyword_difficulty == 0

    def test_negative_volume_rejected(self):
        with pytest.raises(InvalidInputError):
            KeywordAttributes.parse({"search_volume": -1})

    def test_negative_cpc_rejected(self):
        with pytest.raises(InvalidInputError):
            KeywordAttributes.parse({"search_volume": 10, "cpc": -0.5})

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidInputError):
            KeywordAttributes.parse(["kw", 10])
