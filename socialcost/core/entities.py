"""
Core Calculator Entities

This module defines the value objects shared by the engines. Parameter
values themselves are plain ``dict[str, float]`` mappings keyed by
``ParameterName`` values; everything derived from them is immutable.

Entities:
- ParameterSpec: static metadata of one research parameter
- CostResult: snapshot of one calculation
- ConfidenceInterval / DistributionCurve: uncertainty characterization
- PlausibilityWarning: advisory output of the soft checks
- CommunityImpact: population-scaled view of a result
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ParameterName(str, Enum):
    """The nine research parameters driving the cost model."""
    VSL = "vsl"
    SUICIDES = "suicides"
    ATTRIBUTION = "attribution"
    DEPRESSION = "depression"
    YLD = "yld"
    QOL = "qol"
    HEALTHCARE = "healthcare"
    PRODUCTIVITY = "productivity"
    DURATION = "duration"


class DistributionType(str, Enum):
    """
    Shape of a parameter's uncertainty curve.

    Skewed curves fall off faster above the current value, modelling
    right-skewed counts and costs around a consensus point.
    """
    NORMAL = "normal"
    SKEWED = "skewed"


class CostComponent(str, Enum):
    """The three additive components of the total cost."""
    MORTALITY = "mortality"
    MENTAL_HEALTH = "mental_health"
    HEALTHCARE_PRODUCTIVITY = "healthcare_productivity"


@dataclass(frozen=True)
class ValueRange:
    """Closed numeric interval."""
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class ParameterSpec:
    """Static metadata for one parameter."""
    name: ParameterName
    label: str
    unit: str
    default_value: float
    bounds: ValueRange
    step: float
    distribution_type: DistributionType
    uncertainty_factor: float
    research_range: ValueRange
    typical_value: float
    bound_message: str = ""
    citations: tuple = ()

    @property
    def min(self) -> float:
        return self.bounds.min

    @property
    def max(self) -> float:
        return self.bounds.max

    @property
    def citation_text(self) -> str:
        return "; ".join(self.citations)


@dataclass(frozen=True)
class CostResult:
    """
    Immutable snapshot of one calculation.

    ``total`` always equals the sum of the three components. An error result
    has every numeric field zeroed and ``error`` set.
    """
    mortality: float = 0.0
    mental_health: float = 0.0
    healthcare_productivity: float = 0.0
    total: float = 0.0
    gdp_percentage: float = 0.0
    formulas: dict = field(default_factory=dict)
    parameters: dict = field(default_factory=dict)
    error: bool = False
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    @classmethod
    def error_result(cls, parameters: dict, message: str = "Calculation error") -> "CostResult":
        """Zeroed fallback returned instead of propagating NaN."""
        return cls(
            formulas={component.value: "Error" for component in CostComponent},
            parameters=dict(parameters),
            error=True,
            error_message=message
        )

    def components(self) -> dict:
        """Component values keyed by ``CostComponent`` value."""
        return {
            CostComponent.MORTALITY.value: self.mortality,
            CostComponent.MENTAL_HEALTH.value: self.mental_health,
            CostComponent.HEALTHCARE_PRODUCTIVITY.value: self.healthcare_productivity
        }

    def share(self, component: CostComponent) -> float:
        """Fraction of the total contributed by one component."""
        if self.total == 0:
            return 0.0
        return self.components()[component.value] / self.total

    def to_dict(self) -> dict:
        return {
            "mortality": self.mortality,
            "mental_health": self.mental_health,
            "healthcare_productivity": self.healthcare_productivity,
            "total": self.total,
            "gdp_percentage": self.gdp_percentage,
            "formulas": dict(self.formulas),
            "parameters": dict(self.parameters),
            "error": self.error,
            "error_message": self.error_message,
            "timestamp": self.timestamp.isoformat()
        }


class IntervalSource(str, Enum):
    """Where a confidence interval came from."""
    RESEARCH_RANGE = "research_range"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class ConfidenceInterval:
    """Plausible-range band for a parameter value."""
    lower: float
    upper: float
    source: IntervalSource = IntervalSource.DYNAMIC

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class CurvePoint:
    """One sample of a distribution curve (x in parameter units, y in [0, 1])."""
    x: float
    y: float


@dataclass(frozen=True)
class DistributionCurve:
    """Normalized density curve plus its confidence interval."""
    parameter: ParameterName
    value: float
    distribution_type: DistributionType
    display_range: ValueRange
    points: tuple
    interval: ConfidenceInterval
    width: float
    height: float
    peak_height_ratio: float = 0.9

    @property
    def peak(self) -> CurvePoint:
        return max(self.points, key=lambda p: p.y)

    def pixel_points(self) -> list:
        """Project the curve onto a ``width`` x ``height`` canvas (y grows downward)."""
        count = len(self.points)
        if count == 0:
            return []

        max_height = self.height * self.peak_height_ratio
        projected = []
        for index, point in enumerate(self.points):
            position = index / (count - 1) if count > 1 else 0.0
            x = position * self.width
            y = self.height - max_height * point.y
            projected.append(CurvePoint(
                x=max(0.0, min(self.width, x)),
                y=max(0.0, min(self.height, y))
            ))
        return projected


@dataclass(frozen=True)
class DistributionSummary:
    """Text-free summary of a parameter's uncertainty for display."""
    parameter: ParameterName
    label: str
    current: float
    typical: float
    median: float
    interval: ConfidenceInterval
    research_range: ValueRange
    distribution_type: DistributionType
    display_range: ValueRange


class WarningSeverity(Enum):
    """Plausibility warning severity levels."""
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class PlausibilityWarning:
    """Advisory result of a cross-parameter plausibility rule."""
    rule: str
    message: str
    severity: WarningSeverity = WarningSeverity.WARNING
    parameters: tuple = ()
    observed: Optional[float] = None
    threshold: Optional[float] = None


@dataclass(frozen=True)
class CommunityImpact:
    """National result scaled linearly to a community population."""
    population: int
    region: str
    scaling_factor: float
    total_cost: float
    mortality: float
    mental_health: float
    healthcare_productivity: float
    affected_people: int
    excess_deaths: int
