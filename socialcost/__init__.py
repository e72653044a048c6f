"""
Social Media Societal Cost Calculator

Estimates the aggregate economic cost attributable to social-media use from
nine research parameters, with per-parameter uncertainty curves, confidence
intervals and named research scenarios.
"""

__version__ = "0.1.0"

from .calculator import CostCalculator, create_calculator

__all__ = [
    "CostCalculator",
    "create_calculator",
    "__version__"
]
