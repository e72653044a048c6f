# tests/test_scenarios.py
import pytest
from pydantic import ValidationError

from socialcost.core.errors import RangeViolation, UnknownScenarioError
from socialcost.events.notifier import ChangeEvent
from socialcost.scenarios import SCENARIOS, Scenario, ScenarioManager
from socialcost.store import ParameterStore


@pytest.fixture
def store():
    return ParameterStore()


@pytest.fixture
def manager(store):
    return ScenarioManager(store)


def test_presets_are_inside_hard_bounds():
    from socialcost.core.parameters import get_spec

    for scenario in SCENARIOS.values():
        for name, value in scenario.values.items():
            assert get_spec(name).bounds.contains(value)


def test_scenario_definition_is_validated():
    with pytest.raises(ValidationError):
        Scenario(key="bad", name="Bad", values={"vsl": 25})
    with pytest.raises(ValidationError):
        Scenario(key="bad", name="Bad", values={"happiness": 1})


def test_names_keep_definition_order(manager):
    assert manager.names() == ["reset", "optimistic", "aggressive", "facebook_files"]


def test_reset_reproduces_default_result(manager, store):
    default_result = store.results
    manager.apply("aggressive")
    result = manager.apply("reset")

    assert result.total == default_result.total
    assert result.mortality == default_result.mortality
    assert result.mental_health == default_result.mental_health


def test_apply_emits_scenario_applied(manager, store, recorder):
    store.notifier.on(ChangeEvent.SCENARIO_APPLIED, recorder)

    manager.apply("optimistic")

    event = recorder.events[0]
    assert event.scenario_name == "optimistic"
    assert event.old_parameters["vsl"] == 13.7
    assert event.new_parameters["vsl"] == 8.0
    assert store.get("attribution") == 5


def test_apply_unknown_scenario(manager, store):
    with pytest.raises(UnknownScenarioError) as exc_info:
        manager.apply("utopia")
    assert "reset" in exc_info.value.available
    assert store.get("vsl") == 13.7


def test_apply_is_atomic(store):
    broken = Scenario.model_construct(key="broken", name="Broken", description="", values={"vsl": 10.0, "qol": 99})
    manager = ScenarioManager(store, scenarios={"broken": broken})

    with pytest.raises(RangeViolation):
        manager.apply("broken")
    assert store.get("vsl") == 13.7


def test_closest_scenario_at_defaults(manager):
    match = manager.closest_scenario()
    assert match.name == "reset"
    assert match.distance == 0
    assert match.similarity == 1.0


def test_closest_scenario_after_apply(manager):
    manager.apply("facebook_files")
    assert manager.closest_scenario().name == "facebook_files"


def test_closest_scenario_for_explicit_values(manager):
    values = dict(SCENARIOS["optimistic"].values)
    values["vsl"] = 8.5
    match = manager.closest_scenario(values)

    assert match.name == "optimistic"
    assert 0 < match.similarity < 1


def test_preview_does_not_mutate(manager, store):
    before = store.values()
    preview = manager.preview("aggressive")

    assert preview.total > store.results.total
    assert store.values() == before


def test_compare_and_markdown(manager):
    rows = manager.compare()
    assert [row.key for row in rows] == manager.names()
    assert next(row for row in rows if row.key == "reset").delta_from_current == 0

    table = manager.format_comparison_markdown(rows)
    assert table.splitlines()[0].startswith("| Scenario |")
    assert "**Research Consensus**" in table
    assert "Worst Case" in table


# Published scenario tables; values outside the hard bounds are clamped to the nearest bound
EXPECTED_PRESETS = {
    "reset": {
        "vsl": 13.7, "suicides": 110_000, "attribution": 18, "depression": 5_000_000,
        "yld": 6.0, "qol": 35, "healthcare": 7000, "productivity": 6000, "duration": 4.5,
    },
    "optimistic": {
        "vsl": 8.0, "suicides": 100_000, "attribution": 5, "depression": 3_000_000,
        "yld": 4.8, "qol": 31, "healthcare": 6500, "productivity": 6000, "duration": 3.0,
    },
    "aggressive": {
        "vsl": 14.0, "suicides": 300_000, "attribution": 30, "depression": 15_000_000,
        "yld": 8.0, "qol": 40, "healthcare": 20_000, "productivity": 10_000, "duration": 6.0,
    },
    "facebook_files": {
        "vsl": 14.0, "suicides": 180_000, "attribution": 22, "depression": 8_000_000,
        "yld": 6.5, "qol": 38, "healthcare": 10_000, "productivity": 7500, "duration": 5.2,
    },
}


@pytest.mark.parametrize("key", list(EXPECTED_PRESETS))
def test_preset_values_match_published_tables(key):
    assert SCENARIOS[key].values == EXPECTED_PRESETS[key]
    assert SCENARIOS[key].key == key
