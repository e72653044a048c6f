"""
Distribution Model - Uncertainty Characterization

Provides, for every parameter:
- A normalized density-like curve centred on the current value
- A confidence interval (the published research range at consensus,
  otherwise derived from the parameter's uncertainty factor)
- Median and summary views for display

The curve is a deterministic shape function, not a fitted distribution.
Curves are cached per (parameter, width, height, value rounded to 3 places).
"""

import logging
import math
from typing import Callable, Optional, Union

from ..config.settings import DistributionConfig
from ..core.entities import (
    ConfidenceInterval,
    CurvePoint,
    DistributionCurve,
    DistributionSummary,
    DistributionType,
    IntervalSource,
    ParameterName,
)
from ..core.errors import InvalidInputError
from ..core.parameters import display_range, get_spec, is_finite_number, parameter_key
from .cache import CurveCache

logger = logging.getLogger(__name__)

# z-score of a two-sided 95% interval
NORMAL_Z = 1.96
SKEWED_LOWER_SPREAD = 1.5
SKEWED_UPPER_SPREAD = 2.5
SKEWED_MEDIAN_RATIO = 0.95


def shape_density(offset: float, distribution_type: DistributionType) -> float:
    """Unnormalized density at ``offset`` spread-widths from the current value."""
    if distribution_type == DistributionType.SKEWED:
        coefficient = 0.3 if offset < 0 else 1.2
    else:
        coefficient = 0.5

    density = math.exp(-coefficient * offset * offset)
    if not math.isfinite(density) or density < 0:
        return 0.0
    return density


def dynamic_interval(value: float, uncertainty: float, distribution_type: DistributionType) -> ConfidenceInterval:
    """Interval around ``value`` from its standard deviation (value x uncertainty)."""
    std = value * uncertainty
    if distribution_type == DistributionType.SKEWED:
        lower = value - SKEWED_LOWER_SPREAD * std
        upper = value + SKEWED_UPPER_SPREAD * std
    else:
        lower = value - NORMAL_Z * std
        upper = value + NORMAL_Z * std

    lower = max(0.0, lower)
    upper = max(lower, upper)
    return ConfidenceInterval(lower=lower, upper=upper, source=IntervalSource.DYNAMIC)


class DistributionModel:
    """
    Curve and interval generator bound to a source of current values.

    ``value_provider`` maps a parameter name to its current value; the
    parameter store's ``get`` is the usual provider.
    """

    def __init__(
        self,
        value_provider: Callable[[str], float],
        config: Optional[DistributionConfig] = None
    ):
        self._value_provider = value_provider
        self.config = config or DistributionConfig()
        self._cache = CurveCache(self.config.cache_capacity)

    def _current(self, name: str) -> float:
        return self._value_provider(name)

    def display_range(self, name: Union[str, ParameterName]):
        return display_range(get_spec(name), self.config.display_margin)

    # Curves

    def curve(self, name: Union[str, ParameterName], width: float, height: float) -> DistributionCurve:
        """Curve for the parameter's current value."""
        key = parameter_key(name)
        return self.curve_for_value(key, self._current(key), width, height)

    def curve_for_value(
        self,
        name: Union[str, ParameterName],
        value: float,
        width: float,
        height: float
    ) -> DistributionCurve:
        """Curve for an explicit value (rounded to 3 places), served from the cache when possible."""
        key = parameter_key(name)
        if not is_finite_number(value):
            raise InvalidInputError(key, value)
        for label, dimension in (("width", width), ("height", height)):
            if not is_finite_number(dimension) or dimension <= 0:
                raise InvalidInputError(label, dimension, "must be a positive number")

        # A curve's value and interval always match its cache key
        rounded = round(value, 3)
        cache_key = (key, width, height, rounded)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        curve = self._build_curve(key, rounded, width, height)
        self._cache.put(cache_key, curve)
        return curve

    def _build_curve(self, key: str, value: float, width: float, height: float) -> DistributionCurve:
        spec = get_spec(key)
        cfg = self.config
        visible = display_range(spec, cfg.display_margin)

        current_position = (value - visible.min) / visible.span
        current_position = max(cfg.min_position, min(cfg.max_position, current_position))

        count = cfg.sample_points
        positions = [i / (count - 1) for i in range(count)]
        densities = [
            shape_density((position - current_position) / cfg.spread_factor, spec.distribution_type)
            for position in positions
        ]

        max_density = max(densities)
        points = []
        for position, density in zip(positions, densities):
            normalized = density / max_density if max_density > 0 else 0.0
            points.append(CurvePoint(
                x=visible.min + position * visible.span,
                y=normalized ** cfg.peak_compression
            ))

        logger.debug(
            "Generated %d-point %s curve for %s = %s (position %.3f)",
            count, spec.distribution_type.value, key, value, current_position
        )

        return DistributionCurve(
            parameter=spec.name,
            value=value,
            distribution_type=spec.distribution_type,
            display_range=visible,
            points=tuple(points),
            interval=self.confidence_interval(key, value),
            width=width,
            height=height,
            peak_height_ratio=cfg.peak_height_ratio
        )

    # Intervals and point statistics

    def is_at_consensus(self, name: Union[str, ParameterName], value: Optional[float] = None) -> bool:
        """True when the value is within the consensus tolerance of the default."""
        spec = get_spec(name)
        if value is None:
            value = self._current(parameter_key(name))
        if spec.default_value == 0:
            return value == 0
        return abs(value - spec.default_value) / abs(spec.default_value) < self.config.consensus_tolerance

    def confidence_interval(
        self,
        name: Union[str, ParameterName],
        value: Optional[float] = None
    ) -> ConfidenceInterval:
        """
        Likely range for a parameter value.

        Near the published default the research range is returned verbatim so
        the "likely" and "research" ranges agree at consensus.
        """
        key = parameter_key(name)
        spec = get_spec(key)
        if value is None:
            value = self._current(key)
        if not is_finite_number(value):
            raise InvalidInputError(key, value)

        if self.is_at_consensus(key, value):
            return ConfidenceInterval(
                lower=spec.research_range.min,
                upper=spec.research_range.max,
                source=IntervalSource.RESEARCH_RANGE
            )

        return dynamic_interval(value, spec.uncertainty_factor, spec.distribution_type)

    def median(self, name: Union[str, ParameterName], value: Optional[float] = None) -> float:
        key = parameter_key(name)
        spec = get_spec(key)
        if value is None:
            value = self._current(key)
        if spec.distribution_type == DistributionType.SKEWED:
            return value * SKEWED_MEDIAN_RATIO
        return value

    def summary(self, name: Union[str, ParameterName]) -> DistributionSummary:
        key = parameter_key(name)
        spec = get_spec(key)
        value = self._current(key)
        return DistributionSummary(
            parameter=spec.name,
            label=spec.label,
            current=value,
            typical=spec.typical_value,
            median=self.median(key, value),
            interval=self.confidence_interval(key, value),
            research_range=spec.research_range,
            distribution_type=spec.distribution_type,
            display_range=self.display_range(key)
        )

    # Cache management

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict:
        return self._cache.stats()

    @property
    def cache(self) -> CurveCache:
        return self._cache
