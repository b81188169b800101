"""Tests for seasonality detection."""

import pytest

from seo_metrics.config import build_reference_tables
from seo_metrics.services.seasonality import SeasonalityDetector


class TestSeasonalityDetector:
    """Test suite for SeasonalityDetector."""

    @pytest.fixture
    def detector(self, tables):
        return SeasonalityDetector(tables)

    @pytest.mark.parametrize("length", [0, 1, 6, 11])
    def test_short_series_never_seasonal(self, detector, series, length):
        volumes = [100, 5000] * 6
        result = detector.detect(series(volumes[:length]))

        assert result.is_seasonal is False
        assert result.peak_months == ()
        assert result.low_months == ()

    def test_flat_series_not_seasonal(self, detector, flat_series):
        result = detector.detect(flat_series)

        assert result.is_seasonal is False
        assert result.peak_months == ()
        assert result.coefficient_of_variation == 0

    def test_holiday_peaks(self, detector, holiday_series):
        result = detector.detect(holiday_series)

        assert result.is_seasonal is True
        assert result.peak_months == (11, 12)
        assert 1 in result.low_months

    def test_averages_across_years(self, detector, series):
        first = [100] * 12
        second = [300] * 12
        result = detector.detect(series(first + second))

        assert result.monthly_averages[1] == 200
        assert result.is_seasonal is False

    def test_unordered_input(self, detector, holiday_series):
        shuffled = list(reversed(holiday_series))
        assert detector.detect(shuffled) == detector.detect(holiday_series)

    def test_exact_threshold_is_not_peak_or_low(self, detector, series):
        # Mean of monthly averages is exactly 100
        volumes = [120, 80] + [100] * 10
        result = detector.detect(series(volumes))

        assert result.peak_months == ()
        assert result.low_months == ()
        assert result.is_seasonal is False

    def test_just_past_threshold(self, detector, series):
        volumes = [121, 79] + [100] * 10
        result = detector.detect(series(volumes))

        assert result.peak_months == (1,)
        assert result.low_months == (2,)
        # One peak and a small spread are not enough
        assert result.is_seasonal is False

    def test_single_peak_with_high_variation(self, detector, series):
        volumes = [1000] + [100] * 11
        result = detector.detect(series(volumes))

        assert result.peak_months == (1,)
        assert result.coefficient_of_variation > 0.25
        assert result.is_seasonal is True

    def test_cv_exactly_at_threshold_not_seasonal(self, series):
        # Raise the peak ratio so 125 is not a peak; CV is exactly 0.25
        tables = build_reference_tables({"seasonality": {"peak_ratio": 0.3}})
        detector = SeasonalityDetector(tables)
        result = detector.detect(series([75, 125] * 6))

        assert result.coefficient_of_variation == 0.25
        assert result.peak_months == ()
        assert result.is_seasonal is False

    def test_two_peaks_make_seasonal(self, detector, series):
        volumes = [100] * 5 + [130, 130] + [100] * 5
        result = detector.detect(series(volumes))

        assert result.peak_months == (6, 7)
        assert result.is_seasonal is True

    def test_zero_volumes(self, detector, series):
        result = detector.detect(series([0] * 12))
        assert result.is_seasonal is False

    def test_idempotent(self, detector, holiday_series):
        assert detector.detect(holiday_series) == detector.detect(holiday_series)
