"""Tests for the trend analysis orchestrator."""

import pytest

from seo_metrics.models.trend import SeasonalityPattern, TrendAnalysis
from seo_metrics.services.trend_analyzer import TrendAnalyzer


class TestTrendAnalyzer:
    """End-to-end trend analysis."""

    @pytest.fixture
    def analyzer(self, tables):
        return TrendAnalyzer(tables)

    def test_empty_series_default(self, analyzer):
        report = analyzer.analyze([])

        assert report == TrendAnalysis()
        assert report.confidence == 0
        assert report.seasonality_pattern == SeasonalityPattern.STABLE
        assert report.forecast == ()

    def test_flat_series_example(self, analyzer, flat_series):
        report = analyzer.analyze(flat_series, keyword="notary near me")

        assert report.is_seasonal is False
        assert report.growth_rate == 0
        assert report.volatility == 0
        assert [f.predicted_volume for f in report.forecast] == [1000, 1000, 1000]
        assert [f.confidence for f in report.forecast] == [80, 70, 60]
        assert report.anomalies == ()
        # 40 depth + 30 consistency + 10 non-seasonal + 10 recency
        assert report.confidence == 90

    def test_holiday_series(self, analyzer, holiday_series):
        report = analyzer.analyze(holiday_series, keyword="christmas lights")

        assert report.is_seasonal is True
        assert report.peak_months == (11, 12)
        assert report.seasonality_pattern == SeasonalityPattern.HOLIDAY
        assert len(report.forecast) == 3

    def test_short_series(self, analyzer, series):
        report = analyzer.analyze(series([100, 200, 300, 400, 500, 600]))

        assert report.is_seasonal is False
        assert report.growth_rate == 0
        assert len(report.forecast) == 3

    def test_unordered_with_duplicates(self, analyzer, flat_series):
        rows = [p.to_dict() for p in reversed(flat_series)]
        rows.append({"year": 2022, "month": 1, "search_volume": 1000})

        assert analyzer.analyze(rows) == analyzer.analyze(flat_series)

    def test_horizon(self, tables, flat_series):
        report = TrendAnalyzer(tables, horizon=6).analyze(flat_series)
        assert len(report.forecast) == 6

    def test_idempotent(self, analyzer, holiday_series):
        first = analyzer.analyze(holiday_series, "gifts")
        assert analyzer.analyze(holiday_series, "gifts") == first

    def test_to_dict(self, analyzer, holiday_series):
        data = analyzer.analyze(holiday_series).to_dict()

        assert data["seasonality_pattern"] == "holiday"
        assert data["peak_months"] == [11, 12]
        assert data["forecast"][0]["trend"] in {"up", "down", "stable"}


class TestConfidence:
    """Analysis confidence score."""

    @pytest.fixture
    def analyzer(self, tables):
        return TrendAnalyzer(tables)

    def test_full_marks(self, analyzer):
        assert analyzer.confidence(24, 0, True) == 100

    def test_depth_scales(self, analyzer):
        # 12/24 * 40 = 20, + 30 + 10 + 10
        assert analyzer.confidence(12, 0, False) == 70

    def test_volatility_penalty(self, analyzer):
        # 40 + (30 - 60/3) + 20 + 10
        assert analyzer.confidence(36, 60, True) == 80

    def test_high_volatility_floors_consistency(self, analyzer):
        assert analyzer.confidence(24, 100, False) == 60

    def test_bounds(self, analyzer):
        for points in (1, 6, 24, 100):
            for volatility in (0, 50, 100):
                assert 0 <= analyzer.confidence(points, volatility, True) <= 100


class TestSeasonalityPattern:
    """Pattern naming heuristics."""

    @pytest.fixture
    def analyzer(self, tables):
        return TrendAnalyzer(tables)

    def test_no_peaks_always_stable(self, analyzer):
        assert analyzer.seasonality_pattern((), "election news") == SeasonalityPattern.STABLE

    @pytest.mark.parametrize("keyword", ["tech news", "Fashion Trends 2025"])
    def test_trending_keywords(self, analyzer, keyword):
        assert analyzer.seasonality_pattern((12,), keyword) == SeasonalityPattern.TRENDING

    @pytest.mark.parametrize("peaks, pattern", [
        ((11,), SeasonalityPattern.HOLIDAY),
        ((8, 12), SeasonalityPattern.HOLIDAY),
        ((9,), SeasonalityPattern.EVENT),
        ((8,), SeasonalityPattern.EVENT),
        ((7,), SeasonalityPattern.WEATHER),
        ((1,), SeasonalityPattern.WEATHER),
        ((3, 4, 5), SeasonalityPattern.EVENT),
        ((3, 4), SeasonalityPattern.STABLE),
    ])
    def test_calendar_buckets(self, analyzer, peaks, pattern):
        assert analyzer.seasonality_pattern(peaks, "garden hose") == pattern


class TestSeriesUtilities:
    """Smoothing and period comparison."""

    @pytest.fixture
    def analyzer(self, tables):
        return TrendAnalyzer(tables)

    def test_smooth(self, analyzer, series):
        smoothed = analyzer.smooth(series([100, 400, 100, 400]))
        assert [p.search_volume for p in smoothed] == [200, 200, 300, 250]

    def test_smooth_short_series_unchanged(self, analyzer, series):
        history = series([5, 10])
        assert analyzer.smooth(history) == tuple(history)

    def test_compare_growth(self, analyzer, series):
        result = analyzer.compare(series([130] * 3), series([100] * 3))

        assert result.percent_change == 30
        assert result.interpretation.startswith("Strong growth")

    @pytest.mark.parametrize("current, label", [
        (110, "Moderate growth"),
        (100, "Stable"),
        (90, "Moderate decline"),
        (50, "Significant decline"),
    ])
    def test_compare_bands(self, analyzer, series, current, label):
        result = analyzer.compare(series([current] * 3), series([100] * 3))
        assert result.interpretation.startswith(label)

    def test_compare_insufficient(self, analyzer, series):
        result = analyzer.compare([], series([100]))

        assert result.percent_change == 0
        assert result.interpretation == "Insufficient data for comparison"
