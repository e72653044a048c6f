"""
Calculation, validation and uncertainty engines.
"""

from .calculation import (
    VSL_UNIT,
    CalculationEngine,
    annual_qaly_value,
    mortality_cost,
    mental_health_cost,
    healthcare_productivity_cost,
    format_formulas
)
from .validation import ValidationEngine, PlausibilityRule
from .cache import CurveCache
from .distributions import DistributionModel, dynamic_interval, shape_density

__all__ = [
    "VSL_UNIT",
    "CalculationEngine",
    "annual_qaly_value",
    "mortality_cost",
    "mental_health_cost",
    "healthcare_productivity_cost",
    "format_formulas",
    "ValidationEngine",
    "PlausibilityRule",
    "CurveCache",
    "DistributionModel",
    "dynamic_interval",
    "shape_density"
]
