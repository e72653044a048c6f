# tests/conftest.py
import os

import pytest

from socialcost.calculator import CostCalculator
from socialcost.config.settings import Settings, get_settings
from socialcost.core.parameters import default_parameters as _defaults


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Drop any SOCIALCOST_* variables from the host and reset cached settings."""
    for key in list(os.environ):
        if key.startswith("SOCIALCOST_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings.from_env()


@pytest.fixture
def calculator(settings):
    return CostCalculator(settings)


@pytest.fixture
def default_parameters():
    return _defaults()


@pytest.fixture
def recorder():
    """Handler that records every payload it receives."""
    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, payload):
            self.events.append(payload)

    return Recorder()
