"""
Parameter metadata for the cost model.

Single source of truth for default values, hard research bounds, slider
steps, uncertainty shapes and supporting citations. The hard bounds double
as the published research range shown next to each curve.
"""

import math
from typing import Union

from .entities import DistributionType, ParameterName, ParameterSpec, ValueRange
from .errors import UnknownParameterError


def _spec(name, label, unit, default, lo, hi, step, dist, uncertainty, typical, message, citations):
    bounds = ValueRange(lo, hi)
    return ParameterSpec(
        name=name,
        label=label,
        unit=unit,
        default_value=default,
        bounds=bounds,
        step=step,
        distribution_type=dist,
        uncertainty_factor=uncertainty,
        research_range=bounds,
        typical_value=typical,
        bound_message=message,
        citations=tuple(citations)
    )


PARAMETER_SPECS = {
    # Mortality
    ParameterName.VSL.value: _spec(
        ParameterName.VSL, "Value of Statistical Life", "million USD",
        13.7, 7.2, 14.0, 0.1, DistributionType.NORMAL, 0.25, 11.4,
        "VSL must be between $7.2M-$14M based on Robinson et al. to Banzhaf meta-analysis",
        ["Robinson et al. COVID-19 study: $7.2M", "Banzhaf meta-analysis: $14M upper bound"]
    ),
    ParameterName.SUICIDES.value: _spec(
        ParameterName.SUICIDES, "Excess Suicides Since 2009", "deaths",
        110_000, 89_000, 300_000, 1000, DistributionType.SKEWED, 0.30, 150_000,
        "Excess deaths must be between 89K-300K based on PNAS to maximum plausible estimates",
        ["Twenge et al. PNAS (2018): 89,000", "Maximum plausible estimate: 300,000"]
    ),
    ParameterName.ATTRIBUTION.value: _spec(
        ParameterName.ATTRIBUTION, "% Attributable to Social Media", "percent",
        18, 5, 30, 1, DistributionType.NORMAL, 0.35, 18,
        "Attribution rate must be between 5%-30% based on conservative to maximum pathway estimates",
        ["Conservative synthesis: 5%", "Maximum with all pathways: 30%"]
    ),

    # Mental health
    ParameterName.DEPRESSION.value: _spec(
        ParameterName.DEPRESSION, "Americans with SM-Induced Depression", "people",
        5_000_000, 3_000_000, 15_000_000, 100_000, DistributionType.SKEWED, 0.28, 5_000_000,
        "Affected population must be between 3M-15M based on clinical to Surgeon General estimates",
        ["Conservative clinical estimate: 3M", "Surgeon General estimate: 15M"]
    ),
    ParameterName.YLD.value: _spec(
        ParameterName.YLD, "Years Lived with Disability", "years",
        6.0, 4.8, 8.2, 0.1, DistributionType.NORMAL, 0.20, 6.0,
        "Disability duration must be between 4.8-8.2 years based on WHO to extended treatment studies",
        ["WHO conservative: 4.8 years", "De Graaf et al. extended: 8.2 years"]
    ),
    ParameterName.QOL.value: _spec(
        ParameterName.QOL, "Quality of Life Reduction", "percent",
        35, 31, 47, 1, DistributionType.NORMAL, 0.15, 35,
        "Quality impact must be between 31%-47% based on WHO standard to severe comorbidities",
        ["WHO standard: 31%", "Severe cases with comorbidities: 47%"]
    ),

    # Healthcare & productivity
    ParameterName.HEALTHCARE.value: _spec(
        ParameterName.HEALTHCARE, "Annual Healthcare Costs", "USD per person",
        7000, 6500, 20_000, 100, DistributionType.SKEWED, 0.35, 8500,
        "Healthcare cost must be between $6.5K-$20K based on basic to enhanced social media costs",
        ["Conservative basic treatment: $6.5K", "Enhanced social media costs: $20K"]
    ),
    ParameterName.PRODUCTIVITY.value: _spec(
        ParameterName.PRODUCTIVITY, "Annual Productivity Loss", "USD per person",
        6000, 4800, 10_000, 100, DistributionType.SKEWED, 0.25, 7000,
        "Productivity loss must be between $4.8K-$10K based on BLS to RAND comprehensive analysis",
        ["BLS baseline: $4.8K", "RAND comprehensive: $10K"]
    ),
    ParameterName.DURATION.value: _spec(
        ParameterName.DURATION, "Treatment Duration", "years",
        4.5, 3.0, 8.5, 0.1, DistributionType.NORMAL, 0.22, 4.5,
        "Treatment duration must be between 3.0-8.5 years based on conservative to digital wellness treatment",
        ["Conservative short-term: 3.0 years", "Extended digital wellness: 8.5 years"]
    ),
}

PARAMETER_ORDER = [name.value for name in ParameterName]

DEFAULTS = {name: spec.default_value for name, spec in PARAMETER_SPECS.items()}

# Which parameters feed each cost component
COMPONENT_INPUTS = {
    "mortality": ("suicides", "attribution", "vsl"),
    "mental_health": ("depression", "yld", "qol", "vsl"),
    "healthcare_productivity": ("depression", "healthcare", "productivity", "duration"),
}


def parameter_key(name: Union[str, ParameterName]) -> str:
    """Normalize a parameter name to its string key, rejecting unknown names."""
    key = name.value if isinstance(name, ParameterName) else str(name)
    if key not in PARAMETER_SPECS:
        raise UnknownParameterError(key)
    return key


def get_spec(name: Union[str, ParameterName]) -> ParameterSpec:
    """Get the spec for a parameter."""
    return PARAMETER_SPECS[parameter_key(name)]


def default_parameters() -> dict:
    """Fresh copy of the research-consensus parameter set."""
    return dict(DEFAULTS)


def display_range(spec: ParameterSpec, margin: float) -> ValueRange:
    """Hard bounds widened by ``margin`` of their span on each side, floored at zero."""
    pad = spec.bounds.span * margin
    return ValueRange(max(0.0, spec.min - pad), spec.max + pad)


def is_finite_number(value) -> bool:
    """True for real, finite ints and floats (bools excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
