"""
Named research scenarios and the manager that applies them.
"""

from .presets import Scenario, SCENARIOS
from .manager import ScenarioManager, ScenarioMatch, ScenarioComparison

__all__ = [
    "Scenario",
    "SCENARIOS",
    "ScenarioManager",
    "ScenarioMatch",
    "ScenarioComparison"
]
