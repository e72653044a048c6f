"""
Research Scenario Presets

Each scenario is a named, fixed parameter set representing a research
position. Presets are validated when they are defined: every name must be
a known parameter and every value a finite number inside its hard bounds.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.parameters import DEFAULTS, PARAMETER_SPECS, is_finite_number


class Scenario(BaseModel):
    """A named parameter set."""
    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Lookup key, e.g. 'optimistic'")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="What research position this represents")
    values: Dict[str, float] = Field(description="Parameter values keyed by parameter name")

    @field_validator("values")
    @classmethod
    def _check_values(cls, values: Dict[str, float]) -> Dict[str, float]:
        if not values:
            raise ValueError("scenario must define at least one parameter")
        for name, value in values.items():
            spec = PARAMETER_SPECS.get(name)
            if spec is None:
                raise ValueError(f"unknown parameter: {name}")
            if not is_finite_number(value):
                raise ValueError(f"{name} must be a finite number")
            if not spec.bounds.contains(value):
                raise ValueError(
                    f"{name} = {value} is outside the valid range [{spec.min}, {spec.max}]"
                )
        return values


# =============================================================================
# Presets
# =============================================================================

RESET = Scenario(
    key="reset",
    name="Research Consensus",
    description="Published central estimates for every parameter",
    values=dict(DEFAULTS)
)

OPTIMISTIC = Scenario(
    key="optimistic",
    name="Optimistic",
    description="Lower-bound estimates across mortality, prevalence and costs",
    values={
        "vsl": 8.0,
        "suicides": 100_000,
        "attribution": 5,
        "depression": 3_000_000,
        "yld": 4.8,
        "qol": 31,
        "healthcare": 6500,
        "productivity": 6000,
        "duration": 3.0,
    }
)

AGGRESSIVE = Scenario(
    key="aggressive",
    name="Worst Case",
    description="Upper-range estimates with strong attribution to social media",
    values={
        "vsl": 14.0,
        "suicides": 300_000,
        "attribution": 30,
        "depression": 15_000_000,
        "yld": 8.0,
        "qol": 40,
        "healthcare": 20_000,
        "productivity": 10_000,
        "duration": 6.0,
    }
)

FACEBOOK_FILES = Scenario(
    key="facebook_files",
    name="Facebook Files",
    description="Estimates informed by the internal research disclosed in 2021",
    values={
        "vsl": 14.0,
        "suicides": 180_000,
        "attribution": 22,
        "depression": 8_000_000,
        "yld": 6.5,
        "qol": 38,
        "healthcare": 10_000,
        "productivity": 7500,
        "duration": 5.2,
    }
)

# Definition order is significant: closest-scenario ties keep the first.
SCENARIOS: Dict[str, Scenario] = {
    scenario.key: scenario
    for scenario in (RESET, OPTIMISTIC, AGGRESSIVE, FACEBOOK_FILES)
}
