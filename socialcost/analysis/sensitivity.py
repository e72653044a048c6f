"""
Sensitivity Analysis

Varies one parameter at a time across its hard research bounds while the
others stay fixed:
- sweep: totals at evenly spaced points of one parameter's range
- tornado: low/high totals and swing for every parameter, widest first
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Union

from ..core.entities import ParameterName
from ..core.parameters import PARAMETER_ORDER, default_parameters, get_spec, parameter_key
from ..engine.calculation import CalculationEngine


@dataclass(frozen=True)
class SweepPoint:
    """Total cost at one value of the swept parameter."""
    value: float
    total: float
    gdp_percentage: float


@dataclass(frozen=True)
class TornadoBar:
    """Effect of moving one parameter from its lower to its upper bound."""
    parameter: str
    low_value: float
    high_value: float
    low_total: float
    high_total: float

    @property
    def swing(self) -> float:
        return abs(self.high_total - self.low_total)


class SensitivityAnalyzer:
    """
    One-at-a-time sensitivity of the total cost.

    Uses the calculation engine directly so analysis never touches the
    parameter store.
    """

    def __init__(
        self,
        engine: Optional[CalculationEngine] = None,
        base_parameters: Optional[Mapping[str, float]] = None
    ):
        self.engine = engine or CalculationEngine()
        self.base_parameters = dict(base_parameters) if base_parameters else default_parameters()

    def _total_with(self, key: str, value: float):
        return self.engine.calculate_all({**self.base_parameters, key: value})

    def sweep(self, name: Union[str, ParameterName], steps: int = 5) -> list:
        """Totals at ``steps`` evenly spaced values from the lower to the upper bound."""
        if steps < 2:
            raise ValueError("steps must be at least 2")

        key = parameter_key(name)
        spec = get_spec(key)
        points = []

        for i in range(steps):
            value = spec.min + spec.bounds.span * i / (steps - 1)
            result = self._total_with(key, value)
            points.append(SweepPoint(
                value=value,
                total=result.total,
                gdp_percentage=result.gdp_percentage
            ))

        return points

    def tornado(self) -> list:
        """Low/high bars for every parameter, sorted by swing descending."""
        bars = []
        for key in PARAMETER_ORDER:
            spec = get_spec(key)
            bars.append(TornadoBar(
                parameter=key,
                low_value=spec.min,
                high_value=spec.max,
                low_total=self._total_with(key, spec.min).total,
                high_total=self._total_with(key, spec.max).total
            ))

        return sorted(bars, key=lambda bar: bar.swing, reverse=True)

    def generate_report(self) -> dict:
        """Complete sensitivity report."""
        base = self.engine.calculate_all(self.base_parameters)
        return {
            "generated_at": datetime.now().isoformat(),
            "base_total": base.total,
            "base_parameters": dict(self.base_parameters),
            "tornado": [
                {
                    "parameter": bar.parameter,
                    "low_total": bar.low_total,
                    "high_total": bar.high_total,
                    "swing": bar.swing
                }
                for bar in self.tornado()
            ]
        }
