"""Tests for settings and reference table loading."""

import json

import pytest
from pydantic import ValidationError

from seo_metrics.config import (
    CTR_BY_POSITION_DESKTOP,
    Settings,
    build_reference_tables,
    load_reference_tables,
)
from seo_metrics.exceptions import InvalidInputError


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("FORECAST_HORIZON", "ANOMALY_STD_MULTIPLIER", "DUPLICATE_POLICY"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.forecast_horizon == 3
        assert settings.anomaly_std_multiplier == 2.0
        assert settings.duplicate_policy == "mean"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FORECAST_HORIZON", "6")
        monkeypatch.setenv("DUPLICATE_POLICY", "sum")

        settings = Settings()

        assert settings.forecast_horizon == 6
        assert settings.duplicate_policy == "sum"

    def test_env_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("ANOMALY_STD_MULTIPLIER", raising=False)
        (tmp_path / ".env").write_text("ANOMALY_STD_MULTIPLIER=3.5\n")

        assert Settings().anomaly_std_multiplier == 3.5


class TestReferenceTables:
    """Building and loading reference tables."""

    def test_defaults(self, tables):
        assert tables.ctr_desktop == CTR_BY_POSITION_DESKTOP
        assert tables.kd_weights.domain_authority == 0.40
        assert "buy" in tables.intent_keywords["transactional"]

    def test_kd_weights_sum_to_one(self, tables):
        assert sum(tables.kd_weights.model_dump().values()) == pytest.approx(1.0)

    def test_nested_override_merges(self):
        tables = build_reference_tables({"kd_weights": {"rank_volatility": 0.1}})

        assert tables.kd_weights.rank_volatility == 0.1
        assert tables.kd_weights.domain_authority == 0.40

    def test_scalar_override(self):
        assert build_reference_tables({"max_ctr": 0.8}).max_ctr == 0.8

    @pytest.mark.parametrize("overrides", [
        {"max_ctr": 2},
        {"unknown_table": {}},
        {"forecast": {"confidence_start": "high"}},
    ])
    def test_invalid_overrides(self, overrides):
        with pytest.raises(InvalidInputError):
            build_reference_tables(overrides)

    def test_tables_are_frozen(self, tables):
        with pytest.raises(ValidationError):
            tables.max_ctr = 0.9

    @pytest.mark.parametrize("table, key", [
        ("ctr_desktop", 1),
        ("serp_feature_ctr_impact", "featured_snippet"),
        ("intent_keywords", "transactional"),
        ("opportunity_score_ranges", "high"),
        ("kd_ranges", "easy"),
    ])
    def test_tables_are_read_only(self, tables, table, key):
        with pytest.raises(TypeError):
            getattr(tables, table)[key] = 0.9

    def test_shared_tables_cannot_be_changed(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("REFERENCE_TABLES_PATH", raising=False)

        with pytest.raises(TypeError):
            load_reference_tables().ctr_desktop[1] = 0.9
        assert load_reference_tables().ctr_desktop[1] == 0.316

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"brand_ctr_boost": 0.5}))

        assert load_reference_tables(str(path)).brand_ctr_boost == 0.5

    def test_load_from_environment(self, monkeypatch, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"fallback_ctr": 0.02}))
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("REFERENCE_TABLES_PATH", str(path))

        assert load_reference_tables().fallback_ctr == 0.02

    def test_load_is_cached(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("REFERENCE_TABLES_PATH", raising=False)

        assert load_reference_tables() is load_reference_tables()

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputError):
            load_reference_tables(str(tmp_path / "missing.json"))
