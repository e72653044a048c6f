# tests/test_validation.py
import math

import pytest

from socialcost.core.entities import CostResult, PlausibilityWarning, WarningSeverity
from socialcost.core.errors import (
    InvalidInputError,
    RangeViolation,
    UnknownParameterError,
    ValidationFailed,
)
from socialcost.engine.validation import PlausibilityRule, ValidationEngine


@pytest.fixture
def validation():
    return ValidationEngine()


def test_vsl_above_bound_cites_valid_range(validation):
    with pytest.raises(RangeViolation) as exc_info:
        validation.validate_value("vsl", 25)

    error = exc_info.value
    assert error.parameter == "vsl"
    assert error.value == 25
    assert error.valid_range == (7.2, 14.0)
    assert "[7.2, 14.0]" in str(error)
    assert "Robinson" in error.citation


def test_values_on_bounds_are_accepted(validation):
    validation.validate_value("attribution", 5)
    validation.validate_value("attribution", 30)
    validation.validate_value("duration", 8.5)


def test_unknown_and_non_finite_values(validation):
    with pytest.raises(UnknownParameterError):
        validation.validate_value("happiness", 1)
    with pytest.raises(InvalidInputError):
        validation.validate_value("qol", math.nan)
    with pytest.raises(InvalidInputError):
        validation.validate_value("qol", "35")


def test_find_range_violations_in_canonical_order(validation, default_parameters):
    params = {**default_parameters, "duration": 12, "vsl": 2}
    violations = validation.find_range_violations(params)

    assert [v.parameter for v in violations] == ["vsl", "duration"]


def test_validate_hard_raises_first_or_all(validation, default_parameters):
    params = {**default_parameters, "qol": 60, "suicides": 10}

    with pytest.raises(RangeViolation) as exc_info:
        validation.validate_hard(params)
    assert exc_info.value.parameter == "suicides"

    with pytest.raises(ValidationFailed) as exc_info:
        validation.validate_hard(params, collect_all=True)
    assert len(exc_info.value.violations) == 2


def test_validate_hard_rejects_unknown_names(validation, default_parameters):
    with pytest.raises(UnknownParameterError):
        validation.validate_hard({**default_parameters, "bogus": 1})


def test_defaults_produce_no_warnings(validation, default_parameters):
    assert validation.validate_soft(default_parameters) == []


def test_implied_population_rule(validation):
    warnings = validation.validate_soft({"depression": 20_000_000, "attribution": 5})
    assert [w.rule for w in warnings] == ["implied_population"]
    assert warnings[0].observed == pytest.approx(400_000_000)


def test_depression_share_rule(validation):
    warnings = validation.validate_soft({"depression": 60_000_000})
    assert [w.rule for w in warnings] == ["depression_share"]


def test_healthcare_vs_qaly_rule(validation):
    warnings = validation.validate_soft({"vsl": 7.2, "healthcare": 10_000})
    assert [w.rule for w in warnings] == ["healthcare_vs_qaly"]
    assert warnings[0].threshold == pytest.approx(9600)


def test_pessimistic_quality_rule_is_informational(validation, default_parameters):
    warnings = validation.validate_soft({**default_parameters, "qol": 45, "yld": 7.5})
    assert [w.rule for w in warnings] == ["pessimistic_quality"]
    assert warnings[0].severity == WarningSeverity.INFO


def test_soft_warnings_are_logged(validation, caplog):
    with caplog.at_level("WARNING"):
        validation.validate_soft({"depression": 60_000_000})
    assert "depression_share" in caplog.text


def test_custom_rule_can_be_registered(validation, default_parameters):
    def check(params, config):
        if params["vsl"] > 13:
            return PlausibilityWarning(rule="high_vsl", message="VSL near the upper bound")
        return None

    validation.register_rule(PlausibilityRule(name="high_vsl", parameters=("vsl",), check=check))

    warnings = validation.validate_soft(default_parameters)
    assert [w.rule for w in warnings] == ["high_vsl"]


def test_disabled_rule_is_skipped(validation):
    validation.get_rule("depression_share").enabled = False
    assert validation.validate_soft({"depression": 60_000_000}) == []


def test_validate_results(validation):
    good = CostResult(mortality=1.0, mental_health=2.0, healthcare_productivity=3.0, total=6.0)
    bad_sum = CostResult(mortality=1.0, mental_health=2.0, healthcare_productivity=3.0, total=7.0)
    negative = CostResult(mortality=-1.0, mental_health=2.0, healthcare_productivity=3.0, total=4.0)

    assert validation.validate_results(good)
    assert not validation.validate_results(bad_sum)
    assert not validation.validate_results(negative)
    assert not validation.validate_results(CostResult.error_result({}, "boom"))
