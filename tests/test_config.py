"""Tests for configuration module."""

from __future__ import annotations

import pytest

from workout_engine.config import Settings, _ENV_PROFILES, _split_origins, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults():
    s = Settings()
    assert s.app_env == "dev"
    assert s.time_cost_model_path is None
    assert s.plan_underfill_ratio == 0.5
    assert s.plan_max_reported_ids == 5
    assert s.default_top_equipment == 3
    assert s.cors_origins == ["*"]
    assert s.request_id_header_name == "X-Request-ID"


def test_settings_frozen():
    s = Settings()
    try:
        s.app_env = "production"
        assert False, "Should raise"
    except AttributeError:
        pass


def test_settings_is_production():
    s = Settings(app_env="production")
    assert s.is_production is True
    assert s.is_dev is False


def test_settings_is_dev():
    s = Settings(app_env="dev")
    assert s.is_dev is True
    assert s.is_production is False


def test_get_settings_uses_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("PLAN_UNDERFILL_RATIO", "0.4")
    monkeypatch.setenv("PLAN_MAX_REPORTED_IDS", "8")
    monkeypatch.setenv("TIME_COST_MODEL_PATH", "/etc/engine/time_cost.json")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    s = get_settings()
    assert s.app_env == "production"
    assert s.plan_underfill_ratio == 0.4
    assert s.plan_max_reported_ids == 8
    assert s.time_cost_model_path == "/etc/engine/time_cost.json"
    assert s.cors_origins == ["https://a.example", "https://b.example"]


def test_profile_sets_log_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings().log_level == "WARNING"


def test_log_level_env_overrides_profile(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert get_settings().log_level == "DEBUG"


def test_unknown_env_uses_dev_profile(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("APP_ENV", "qa")
    s = get_settings()
    assert s.app_env == "qa"
    assert s.log_level == "DEBUG"


def test_blank_model_path_is_none(monkeypatch):
    monkeypatch.setenv("TIME_COST_MODEL_PATH", "")
    assert get_settings().time_cost_model_path is None


def test_env_profiles_exist():
    assert set(_ENV_PROFILES) == {"dev", "staging", "production"}


def test_split_origins_drops_blanks():
    assert _split_origins(" a , ,b ") == ["a", "b"]
    assert _split_origins("") == []
