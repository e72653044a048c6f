"""
Consistency checks of the cost formulas.

Regression checks run against a parameter set:
- Doubling vsl doubles the mortality and mental health components
- Doubling depression doubles the mental health and healthcare components
- Zero attribution removes the mortality component
- Components are non-negative and sum to the total
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.parameters import default_parameters
from ..engine.calculation import CalculationEngine


@dataclass
class ConsistencyReport:
    """Named outcomes of each check."""
    vsl_doubling: bool = False
    depression_doubling: bool = False
    zero_attribution: bool = False
    non_negative: bool = False
    sum_invariant: bool = False
    failures: list = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "vsl_doubling": self.vsl_doubling,
            "depression_doubling": self.depression_doubling,
            "zero_attribution": self.zero_attribution,
            "non_negative": self.non_negative,
            "sum_invariant": self.sum_invariant,
            "passed": self.passed,
        }


def _close(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) <= abs(b) * tolerance


def check_consistency(
    parameters: Optional[Mapping[str, float]] = None,
    engine: Optional[CalculationEngine] = None
) -> ConsistencyReport:
    """
    Run every consistency check.

    The checks scale parameters beyond their hard bounds on purpose, so they
    call the calculation engine directly rather than going through the store.
    """
    engine = engine or CalculationEngine()
    params = dict(parameters) if parameters else default_parameters()
    tolerance = engine.config.result_tolerance
    report = ConsistencyReport()

    base = engine.calculate_all(params)

    doubled_vsl = engine.calculate_all({**params, "vsl": params["vsl"] * 2})
    report.vsl_doubling = (
        doubled_vsl.mortality == base.mortality * 2
        and doubled_vsl.mental_health == base.mental_health * 2
    )

    doubled_depression = engine.calculate_all({**params, "depression": params["depression"] * 2})
    report.depression_doubling = (
        _close(doubled_depression.mental_health, base.mental_health * 2, tolerance)
        and _close(doubled_depression.healthcare_productivity, base.healthcare_productivity * 2, tolerance)
    )

    no_attribution = engine.calculate_all({**params, "attribution": 0})
    report.zero_attribution = no_attribution.mortality == 0

    report.non_negative = all(value >= 0 for value in base.components().values())
    report.sum_invariant = _close(sum(base.components().values()), base.total, tolerance)

    for name in ("vsl_doubling", "depression_doubling", "zero_attribution", "non_negative", "sum_invariant"):
        if not getattr(report, name):
            report.failures.append(name)

    return report
