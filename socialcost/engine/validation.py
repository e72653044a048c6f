"""
Validation Engine

Two layers of checks over a parameter set:
- Hard checks against research bounds. Violations raise and reject the
  update before any value changes.
- Soft plausibility rules across parameters. These only produce warnings
  and never block a calculation.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from ..config.settings import CalculationConfig
from ..core.entities import CostResult, ParameterName, PlausibilityWarning, WarningSeverity
from ..core.errors import InvalidInputError, RangeViolation, ValidationFailed
from ..core.parameters import PARAMETER_ORDER, get_spec, is_finite_number, parameter_key
from .calculation import annual_qaly_value

logger = logging.getLogger(__name__)


@dataclass
class PlausibilityRule:
    """
    Definition of a soft, cross-parameter rule.

    ``check`` receives the parameter set and the calculation config and
    returns a warning when the rule fires, None otherwise.
    """
    name: str
    description: str = ""
    parameters: tuple = ()
    severity: WarningSeverity = WarningSeverity.WARNING
    check: Callable[[Mapping[str, float], CalculationConfig], Optional[PlausibilityWarning]] = None
    enabled: bool = True

    def applies_to(self, parameters: Mapping[str, float]) -> bool:
        return all(is_finite_number(parameters.get(name)) for name in self.parameters)


def _implied_population(params, config: CalculationConfig) -> Optional[PlausibilityWarning]:
    attribution = params["attribution"]
    if attribution <= 0:
        return None
    implied = params["depression"] / (attribution / 100)
    if implied > config.national_population:
        return PlausibilityWarning(
            rule="implied_population",
            message=(
                f"Implied total cases ({implied:,.0f}) exceed the national population "
                f"({config.national_population:,})"
            ),
            parameters=("depression", "attribution"),
            observed=implied,
            threshold=float(config.national_population)
        )
    return None


def _depression_share(params, config: CalculationConfig) -> Optional[PlausibilityWarning]:
    depression = params["depression"]
    if depression > config.max_plausible_cases:
        return PlausibilityWarning(
            rule="depression_share",
            message=f"Depression cases ({depression:,.0f}) seem high relative to the population",
            parameters=("depression",),
            observed=depression,
            threshold=float(config.max_plausible_cases)
        )
    return None


def _healthcare_vs_qaly(params, config: CalculationConfig) -> Optional[PlausibilityWarning]:
    qaly = annual_qaly_value(params["vsl"], config.life_expectancy)
    limit = qaly * 0.1
    if params["healthcare"] > limit:
        return PlausibilityWarning(
            rule="healthcare_vs_qaly",
            message=(
                f"Healthcare costs ({params['healthcare']:,.0f}) seem high relative to the "
                f"VSL-derived QALY value ({qaly:,.0f})"
            ),
            parameters=("healthcare", "vsl"),
            observed=params["healthcare"],
            threshold=limit
        )
    return None


def _pessimistic_quality(params, config: CalculationConfig) -> Optional[PlausibilityWarning]:
    if params["qol"] > 40 and params["yld"] > 7:
        return PlausibilityWarning(
            rule="pessimistic_quality",
            message=(
                f"High quality impact ({params['qol']:g}%) with long duration "
                f"({params['yld']:g} years) may be pessimistic"
            ),
            severity=WarningSeverity.INFO,
            parameters=("qol", "yld"),
            observed=params["qol"],
            threshold=40.0
        )
    return None


class ValidationEngine:
    """
    Engine for hard bound checks and soft plausibility rules.

    Default soft rules flag:
    - Implied total cases above the national population
    - Depression counts above a plausible share of the population
    - Healthcare costs that dwarf the annual QALY value
    - High quality loss combined with a long disability duration
    """

    def __init__(self, config: Optional[CalculationConfig] = None):
        self.config = config or CalculationConfig()
        self._rules: dict[str, PlausibilityRule] = {}

        self._initialize_default_rules()

    def _initialize_default_rules(self) -> None:
        """Create default plausibility rules."""
        default_rules = [
            PlausibilityRule(
                name="implied_population",
                description="depression / attribution must stay below the national population",
                parameters=("depression", "attribution"),
                check=_implied_population
            ),
            PlausibilityRule(
                name="depression_share",
                description="Affected population above ~15% of the country",
                parameters=("depression",),
                check=_depression_share
            ),
            PlausibilityRule(
                name="healthcare_vs_qaly",
                description="Healthcare cost above 10% of the annual QALY value",
                parameters=("healthcare", "vsl"),
                check=_healthcare_vs_qaly
            ),
            PlausibilityRule(
                name="pessimistic_quality",
                description="Quality loss above 40% with disability longer than 7 years",
                parameters=("qol", "yld"),
                severity=WarningSeverity.INFO,
                check=_pessimistic_quality
            ),
        ]

        for rule in default_rules:
            self.register_rule(rule)

    def register_rule(self, rule: PlausibilityRule) -> None:
        """Register (or replace) a soft rule."""
        self._rules[rule.name] = rule

    def get_rule(self, name: str) -> Optional[PlausibilityRule]:
        return self._rules.get(name)

    @property
    def rules(self) -> list:
        return list(self._rules.values())

    # Hard checks

    def validate_value(self, name: Union[str, ParameterName], value: float) -> None:
        """
        Validate a single parameter value.

        Raises:
            UnknownParameterError: Name is not one of the nine parameters
            InvalidInputError: Value is not a finite number
            RangeViolation: Value lies outside the hard bounds
        """
        key = parameter_key(name)
        if not is_finite_number(value):
            raise InvalidInputError(key, value)

        spec = get_spec(key)
        if not spec.bounds.contains(value):
            raise RangeViolation(key, value, spec.min, spec.max, spec.citation_text)

    def find_range_violations(self, parameters: Mapping[str, float]) -> list:
        """Every out-of-bounds parameter, in canonical order. Never raises for bounds."""
        violations = []
        for key in PARAMETER_ORDER:
            if key not in parameters:
                continue
            value = parameters[key]
            if not is_finite_number(value):
                raise InvalidInputError(key, value)
            spec = get_spec(key)
            if not spec.bounds.contains(value):
                violations.append(
                    RangeViolation(key, value, spec.min, spec.max, spec.citation_text)
                )
        return violations

    def validate_hard(self, parameters: Mapping[str, float], collect_all: bool = False) -> None:
        """
        Check a parameter set against the hard research bounds.

        Unknown names are rejected. With ``collect_all`` every violation is
        reported through ``ValidationFailed``; otherwise the first one is
        raised as ``RangeViolation``.
        """
        for name in parameters:
            parameter_key(name)

        violations = self.find_range_violations(parameters)
        if not violations:
            return

        for violation in violations:
            logger.warning("Range violation: %s", violation)

        if collect_all:
            raise ValidationFailed(violations)
        raise violations[0]

    # Soft checks

    def validate_soft(self, parameters: Mapping[str, float]) -> list:
        """Run every enabled plausibility rule. Advisory only."""
        warnings = []
        for rule in self._rules.values():
            if not rule.enabled or rule.check is None or not rule.applies_to(parameters):
                continue
            warning = rule.check(parameters, self.config)
            if warning is not None:
                logger.warning("Plausibility warning [%s]: %s", warning.rule, warning.message)
                warnings.append(warning)
        return warnings

    def validate_results(self, result: CostResult) -> bool:
        """Components are non-negative and sum to the total."""
        if result.error:
            return False

        components = (result.mortality, result.mental_health, result.healthcare_productivity)
        if any(c < 0 for c in components):
            logger.error("Negative cost component detected: %s", components)
            return False

        expected = sum(components)
        tolerance = abs(result.total) * self.config.result_tolerance
        if abs(result.total - expected) > tolerance:
            logger.error("Total cost mismatch: total=%s sum=%s", result.total, expected)
            return False

        return True
