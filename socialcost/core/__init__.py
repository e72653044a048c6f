"""
Core domain models for the cost calculator: parameter metadata, result
snapshots, uncertainty value objects and the error taxonomy.
"""

from .entities import (
    ParameterName,
    DistributionType,
    CostComponent,
    ValueRange,
    ParameterSpec,
    CostResult,
    IntervalSource,
    ConfidenceInterval,
    CurvePoint,
    DistributionCurve,
    DistributionSummary,
    WarningSeverity,
    PlausibilityWarning,
    CommunityImpact
)
from .errors import (
    CalculatorError,
    InvalidInputError,
    UnknownParameterError,
    RangeViolation,
    ValidationFailed,
    CalculationErrorKind,
    CalculationError,
    UnknownScenarioError
)
from .parameters import (
    PARAMETER_SPECS,
    PARAMETER_ORDER,
    DEFAULTS,
    COMPONENT_INPUTS,
    parameter_key,
    get_spec,
    default_parameters,
    display_range,
    is_finite_number
)

__all__ = [
    "ParameterName",
    "DistributionType",
    "CostComponent",
    "ValueRange",
    "ParameterSpec",
    "CostResult",
    "IntervalSource",
    "ConfidenceInterval",
    "CurvePoint",
    "DistributionCurve",
    "DistributionSummary",
    "WarningSeverity",
    "PlausibilityWarning",
    "CommunityImpact",
    "CalculatorError",
    "InvalidInputError",
    "UnknownParameterError",
    "RangeViolation",
    "ValidationFailed",
    "CalculationErrorKind",
    "CalculationError",
    "UnknownScenarioError",
    "PARAMETER_SPECS",
    "PARAMETER_ORDER",
    "DEFAULTS",
    "COMPONENT_INPUTS",
    "parameter_key",
    "get_spec",
    "default_parameters",
    "display_range",
    "is_finite_number"
]
