"""
Event system connecting the calculator core to its collaborators.
"""

from .notifier import (
    ChangeEvent,
    ChangeNotifier,
    ParameterChanged,
    ParametersUpdated,
    SignificantChange,
    ScenarioApplied
)

__all__ = [
    "ChangeEvent",
    "ChangeNotifier",
    "ParameterChanged",
    "ParametersUpdated",
    "SignificantChange",
    "ScenarioApplied"
]
