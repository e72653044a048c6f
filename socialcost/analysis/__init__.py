"""
Analysis tools built on the calculation engine.
"""

from .sensitivity import SensitivityAnalyzer, SweepPoint, TornadoBar
from .consistency import ConsistencyReport, check_consistency

__all__ = [
    "SensitivityAnalyzer",
    "SweepPoint",
    "TornadoBar",
    "ConsistencyReport",
    "check_consistency"
]
