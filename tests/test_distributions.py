# tests/test_distributions.py
import math

import pytest

from socialcost.config.settings import DistributionConfig
from socialcost.core.entities import DistributionType, IntervalSource
from socialcost.core.errors import InvalidInputError, UnknownParameterError
from socialcost.core.parameters import default_parameters, get_spec
from socialcost.engine.distributions import DistributionModel, dynamic_interval, shape_density


@pytest.fixture
def values():
    return default_parameters()


@pytest.fixture
def model(values):
    return DistributionModel(values.__getitem__, DistributionConfig())


def test_interval_at_default_is_research_range(model):
    interval = model.confidence_interval("vsl")

    assert (interval.lower, interval.upper) == (7.2, 14.0)
    assert interval.source == IntervalSource.RESEARCH_RANGE


def test_interval_within_consensus_tolerance(model, values):
    values["vsl"] = 13.2
    interval = model.confidence_interval("vsl")
    assert interval.source == IntervalSource.RESEARCH_RANGE


def test_normal_dynamic_interval(model):
    interval = model.confidence_interval("vsl", 10.0)

    assert interval.source == IntervalSource.DYNAMIC
    assert interval.lower == pytest.approx(10.0 - 1.96 * 2.5)
    assert interval.upper == pytest.approx(10.0 + 1.96 * 2.5)


def test_skewed_dynamic_interval_is_asymmetric(model):
    interval = model.confidence_interval("suicides", 200_000)

    assert interval.lower == pytest.approx(110_000)
    assert interval.upper == pytest.approx(350_000)


def test_dynamic_interval_clamps_lower_bound():
    interval = dynamic_interval(10, 0.8, DistributionType.NORMAL)
    assert interval.lower == 0
    assert interval.upper >= interval.lower


def test_shape_density_skew():
    assert shape_density(-1.0, DistributionType.SKEWED) > shape_density(1.0, DistributionType.SKEWED)
    assert shape_density(-1.0, DistributionType.NORMAL) == shape_density(1.0, DistributionType.NORMAL)
    assert shape_density(0.0, DistributionType.SKEWED) == 1.0


def test_curve_is_normalized_and_peaks_at_value(model):
    curve = model.curve("vsl", 300, 100)
    spread = curve.display_range.span / (len(curve.points) - 1)

    assert len(curve.points) == 100
    assert all(0.0 <= point.y <= 1.0 for point in curve.points)
    assert max(point.y for point in curve.points) == 1.0
    assert curve.peak.x == pytest.approx(13.7, abs=spread)


def test_curve_spans_expanded_display_range(model):
    spec = get_spec("vsl")
    curve = model.curve("vsl", 300, 100)

    assert curve.points[0].x == pytest.approx(curve.display_range.min)
    assert curve.points[-1].x == pytest.approx(curve.display_range.max)
    assert curve.display_range.min < spec.min
    assert curve.display_range.max > spec.max
    assert curve.display_range.min >= 0


def test_curve_carries_interval(model):
    curve = model.curve("depression", 300, 100)
    assert curve.interval == model.confidence_interval("depression")


def test_pixel_projection(model):
    curve = model.curve("qol", 300, 100)
    pixels = curve.pixel_points()

    assert pixels[0].x == 0
    assert pixels[-1].x == pytest.approx(300)
    assert all(0 <= p.y <= 100 for p in pixels)
    assert min(p.y for p in pixels) == pytest.approx(10)


def test_value_outside_display_range_is_clamped(model):
    curve = model.curve_for_value("vsl", 100.0, 300, 100)
    assert curve.peak.x == pytest.approx(curve.display_range.max, rel=0.05)


def test_curves_are_cached_by_rounded_value(model):
    first = model.curve_for_value("yld", 6.0, 300, 100)
    second = model.curve_for_value("yld", 6.0001, 300, 100)
    other_size = model.curve_for_value("yld", 6.0, 200, 100)

    assert first is second
    assert other_size is not first
    assert model.cache_stats()["hits"] == 1


def test_cache_is_bounded(values):
    model = DistributionModel(values.__getitem__, DistributionConfig(cache_capacity=3))
    for value in (5.0, 5.5, 6.0, 6.5):
        model.curve_for_value("yld", value, 300, 100)

    stats = model.cache_stats()
    assert stats["size"] == 3
    assert stats["evictions"] == 1

    model.clear_cache()
    assert len(model.cache) == 0


def test_invalid_curve_requests(model):
    with pytest.raises(UnknownParameterError):
        model.curve("happiness", 300, 100)
    with pytest.raises(InvalidInputError):
        model.curve_for_value("vsl", math.nan, 300, 100)
    with pytest.raises(InvalidInputError):
        model.curve("vsl", 0, 100)


def test_median(model):
    assert model.median("suicides") == pytest.approx(110_000 * 0.95)
    assert model.median("vsl") == 13.7


def test_summary(model):
    summary = model.summary("healthcare")

    assert summary.current == 7000
    assert summary.typical == 8500
    assert summary.distribution_type == DistributionType.SKEWED
    assert summary.research_range.min == 6500
    assert summary.interval.source == IntervalSource.RESEARCH_RANGE


def test_cached_curve_is_built_from_rounded_value(model):
    first = model.curve_for_value("yld", 7.0004, 300, 100)
    second = model.curve_for_value("yld", 7.0, 300, 100)

    assert first is second
    assert first.value == 7.0
    assert first.interval == model.confidence_interval("yld", 7.0)
