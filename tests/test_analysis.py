# tests/test_analysis.py
import pytest

from socialcost.analysis import SensitivityAnalyzer, check_consistency
from socialcost.core.parameters import PARAMETER_ORDER


def test_sweep_covers_hard_range():
    points = SensitivityAnalyzer().sweep("vsl", steps=5)

    assert len(points) == 5
    assert points[0].value == pytest.approx(7.2)
    assert points[-1].value == pytest.approx(14.0)
    totals = [p.total for p in points]
    assert totals == sorted(totals)


def test_sweep_requires_two_steps():
    with pytest.raises(ValueError):
        SensitivityAnalyzer().sweep("vsl", steps=1)


def test_tornado_sorted_by_swing():
    bars = SensitivityAnalyzer().tornado()

    assert sorted(bar.parameter for bar in bars) == sorted(PARAMETER_ORDER)
    swings = [bar.swing for bar in bars]
    assert swings == sorted(swings, reverse=True)
    assert bars[0].parameter == "depression"


def test_report_contains_tornado():
    report = SensitivityAnalyzer().generate_report()
    assert report["base_total"] == pytest.approx(2.48176e12, rel=1e-6)
    assert len(report["tornado"]) == len(PARAMETER_ORDER)


def test_consistency_passes_at_defaults():
    report = check_consistency()

    assert report.passed
    assert report.to_dict() == {
        "vsl_doubling": True,
        "depression_doubling": True,
        "zero_attribution": True,
        "non_negative": True,
        "sum_invariant": True,
        "passed": True,
    }


def test_consistency_on_scenario_values():
    from socialcost.scenarios import SCENARIOS

    for scenario in SCENARIOS.values():
        assert check_consistency(scenario.values).passed
