"""
Error taxonomy for the calculator.

Boundary errors (invalid input, unknown names, range violations) are raised
to the caller. Calculation errors are caught by the engine and turned into
an error result.
"""

from enum import Enum
from typing import Optional


class CalculatorError(Exception):
    """Base class for all calculator errors."""
    pass


class InvalidInputError(CalculatorError, ValueError):
    """A value is missing, NaN or infinite."""

    def __init__(self, parameter: Optional[str], value, reason: str = "must be a finite number"):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        label = parameter if parameter else "input"
        super().__init__(f"Invalid value for {label}: {value!r} ({reason})")


class UnknownParameterError(CalculatorError, KeyError):
    """Raised for a parameter name outside the nine known parameters."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(parameter)

    def __str__(self) -> str:
        return f"Unknown parameter: {self.parameter}"


class RangeViolation(CalculatorError, ValueError):
    """A parameter lies outside its hard research bounds."""

    def __init__(self, parameter: str, value: float, min: float, max: float, citation: str = ""):
        self.parameter = parameter
        self.value = value
        self.min = min
        self.max = max
        self.citation = citation
        message = (
            f"Parameter {parameter} = {value} is outside the valid range [{min}, {max}]"
        )
        if citation:
            message += f". Citations: {citation}"
        super().__init__(message)

    @property
    def valid_range(self) -> tuple:
        return (self.min, self.max)


class ValidationFailed(CalculatorError, ValueError):
    """Aggregate of every range violation found in a parameter set."""

    def __init__(self, violations: list):
        self.violations = list(violations)
        names = ", ".join(v.parameter for v in self.violations)
        super().__init__(f"{len(self.violations)} parameter(s) out of range: {names}")


class CalculationErrorKind(Enum):
    """Why a calculation could not produce a valid result."""
    INVALID_INPUT = "invalid_input"
    NUMERIC_OVERFLOW = "numeric_overflow"


class CalculationError(CalculatorError, ArithmeticError):
    """An internal invariant of the cost formulas was broken."""

    def __init__(self, kind: CalculationErrorKind, message: str, component: Optional[str] = None):
        self.kind = kind
        self.component = component
        super().__init__(message)


class UnknownScenarioError(CalculatorError, KeyError):
    """Raised when a scenario key is not defined."""

    def __init__(self, scenario_name: str, available: Optional[list] = None):
        self.scenario_name = scenario_name
        self.available = list(available or [])
        super().__init__(scenario_name)

    def __str__(self) -> str:
        if self.available:
            return f"Unknown scenario: {self.scenario_name} (available: {', '.join(self.available)})"
        return f"Unknown scenario: {self.scenario_name}"
