# tests/test_settings.py
import logging

import pytest
from pydantic import ValidationError

from socialcost.config import configure_logging
from socialcost.config.settings import CalculationConfig, DistributionConfig, Settings, get_settings


def test_defaults(settings):
    assert settings.calculation.us_gdp == 24e12
    assert settings.calculation.life_expectancy == 75
    assert settings.calculation.national_population == 331_000_000
    assert settings.distribution.spread_factor == 0.12
    assert settings.distribution.sample_points == 100
    assert settings.distribution.cache_capacity == 50
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SOCIALCOST_CALC_NATIONAL_POPULATION", "100000000")
    monkeypatch.setenv("SOCIALCOST_DIST_SAMPLE_POINTS", "25")
    monkeypatch.setenv("SOCIALCOST_LOG_LEVEL", "DEBUG")

    settings = Settings.from_env()

    assert settings.calculation.national_population == 100_000_000
    assert settings.distribution.sample_points == 25
    assert settings.log_level == "DEBUG"


def test_invalid_values_rejected(monkeypatch):
    with pytest.raises(ValidationError):
        DistributionConfig(cache_capacity=0)
    with pytest.raises(ValidationError):
        CalculationConfig(us_gdp=-1)

    monkeypatch.setenv("SOCIALCOST_DIST_SAMPLE_POINTS", "1")
    with pytest.raises(ValidationError):
        DistributionConfig()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_configured_sample_points_drive_curve(monkeypatch):
    from socialcost import create_calculator

    monkeypatch.setenv("SOCIALCOST_DIST_SAMPLE_POINTS", "11")
    curve = create_calculator().curve("vsl", 300, 100)
    assert len(curve.points) == 11


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")

    assert calls["level"] == logging.DEBUG
    assert "%(levelname)s" in calls["format"]
