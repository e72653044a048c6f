"""
Calculation Engine

Turns the nine research parameters into three additive cost components:
- Mortality: excess suicides x attribution x value of statistical life
- Mental health: affected people x years with disability x quality loss x
  annual QALY value (VSL spread over life expectancy)
- Healthcare & productivity: affected people x annual costs x duration

Every component reads only its own inputs, so changing a parameter that a
formula does not use leaves that formula's output bit-identical. ``vsl`` is
kept as the last factor so doubling it doubles the result exactly.
"""

import logging
import math
from typing import Mapping, Optional

from ..config.settings import CalculationConfig
from ..core.entities import CostResult
from ..core.errors import CalculationError, CalculationErrorKind
from ..core.formatting import format_currency
from ..core.parameters import COMPONENT_INPUTS, is_finite_number

logger = logging.getLogger(__name__)

VSL_UNIT = 1_000_000  # vsl is expressed in millions of USD


def _require(parameters: Mapping[str, float], names: tuple) -> list:
    """Fetch inputs, raising INVALID_INPUT for missing or non-finite values."""
    values = []
    for name in names:
        if name not in parameters:
            raise CalculationError(
                CalculationErrorKind.INVALID_INPUT,
                f"Missing parameter: {name}"
            )
        value = parameters[name]
        if not is_finite_number(value):
            raise CalculationError(
                CalculationErrorKind.INVALID_INPUT,
                f"Parameter {name} must be a finite number, got {value!r}"
            )
        values.append(value)
    return values


def _check_result(component: str, value: float) -> float:
    if not math.isfinite(value) or value < 0:
        raise CalculationError(
            CalculationErrorKind.NUMERIC_OVERFLOW,
            f"Invalid {component} result: {value}",
            component=component
        )
    return value


def annual_qaly_value(vsl: float, life_expectancy: float = 75) -> float:
    """Value of one quality-adjusted life year in USD."""
    return (vsl * VSL_UNIT) / life_expectancy


def mortality_cost(parameters: Mapping[str, float]) -> float:
    """Excess suicides x attribution % x value of statistical life."""
    suicides, attribution, vsl = _require(parameters, COMPONENT_INPUTS["mortality"])
    return _check_result("mortality", suicides * (attribution / 100) * (vsl * VSL_UNIT))


def mental_health_cost(parameters: Mapping[str, float], life_expectancy: float = 75) -> float:
    """People x years with disability x quality loss % x annual QALY value."""
    depression, yld, qol, vsl = _require(parameters, COMPONENT_INPUTS["mental_health"])
    cost = depression * yld * (qol / 100) * annual_qaly_value(vsl, life_expectancy)
    return _check_result("mental_health", cost)


def healthcare_productivity_cost(parameters: Mapping[str, float]) -> float:
    """People x (healthcare + productivity) x treatment duration."""
    depression, healthcare, productivity, duration = _require(
        parameters, COMPONENT_INPUTS["healthcare_productivity"]
    )
    return _check_result("healthcare_productivity", depression * (healthcare + productivity) * duration)


def format_formulas(
    parameters: Mapping[str, float],
    mortality: float,
    mental_health: float,
    healthcare_productivity: float,
    life_expectancy: float = 75
) -> dict:
    """Human-readable formula strings with the values substituted."""
    p = parameters
    qaly = annual_qaly_value(p["vsl"], life_expectancy)
    people = f"{round(p['depression'] / 1_000_000)}M"
    return {
        "mortality": (
            f"{round(p['suicides'] / 1000)}K × {p['attribution']:g}% × "
            f"{format_currency(p['vsl'] * VSL_UNIT)} = {format_currency(mortality)}"
        ),
        "mental_health": (
            f"{people} × {p['yld']:g}yr × {p['qol']:g}% × "
            f"{format_currency(qaly)} = {format_currency(mental_health)}"
        ),
        "healthcare_productivity": (
            f"{people} × {format_currency(p['healthcare'] + p['productivity'])} × "
            f"{p['duration']:g}yr = {format_currency(healthcare_productivity)}"
        ),
    }


class CalculationEngine:
    """
    Stateless cost engine.

    Constants (GDP, life expectancy) come from ``CalculationConfig`` so they
    can be overridden through the environment.
    """

    def __init__(self, config: Optional[CalculationConfig] = None):
        self.config = config or CalculationConfig()

    def annual_qaly_value(self, vsl: float) -> float:
        return annual_qaly_value(vsl, self.config.life_expectancy)

    def calculate_all(self, parameters: Mapping[str, float]) -> CostResult:
        """
        Calculate all three components, the total and the GDP share.

        Raises:
            CalculationError: On missing/non-finite inputs or an invalid result
        """
        mortality = mortality_cost(parameters)
        mental_health = mental_health_cost(parameters, self.config.life_expectancy)
        healthcare_productivity = healthcare_productivity_cost(parameters)

        total = mortality + mental_health + healthcare_productivity
        _check_result("total", total)

        return CostResult(
            mortality=mortality,
            mental_health=mental_health,
            healthcare_productivity=healthcare_productivity,
            total=total,
            gdp_percentage=(total / self.config.us_gdp) * 100,
            formulas=format_formulas(
                parameters, mortality, mental_health, healthcare_productivity,
                self.config.life_expectancy
            ),
            parameters=dict(parameters)
        )

    def calculate_or_error(self, parameters: Mapping[str, float]) -> CostResult:
        """Like ``calculate_all`` but returns a zeroed error result instead of raising."""
        try:
            return self.calculate_all(parameters)
        except CalculationError as e:
            logger.exception("Calculation error (%s)", e.kind.value)
            return CostResult.error_result(parameters, str(e))
