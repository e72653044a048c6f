"""
Scenario Manager

Applies named research scenarios to the parameter store and answers
"which scenario is the current state closest to?".

Provides:
- Atomic application (the merged set is validated before any change)
- Closest-scenario matching by normalized absolute distance
- Side-effect free previews and a comparison table across scenarios
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.entities import CostResult
from ..core.errors import UnknownScenarioError
from ..core.formatting import format_currency, format_percentage
from ..events.notifier import ChangeEvent, ChangeNotifier, ScenarioApplied
from ..store import ParameterStore
from .presets import SCENARIOS, Scenario

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioMatch:
    """Closest scenario to a parameter set."""
    name: str
    similarity: float
    distance: float


@dataclass(frozen=True)
class ScenarioComparison:
    """One row of a scenario comparison."""
    key: str
    name: str
    total: float
    gdp_percentage: float
    delta_from_current: float
    delta_percent: float
    is_closest: bool = False


class ScenarioManager:
    """
    Manager for preset scenarios bound to one parameter store.

    The store owns the values; the manager only decides what to swap in and
    announces it on the notifier.
    """

    def __init__(
        self,
        store: ParameterStore,
        notifier: Optional[ChangeNotifier] = None,
        scenarios: Optional[Mapping[str, Scenario]] = None
    ):
        self.store = store
        self.notifier = notifier or store.notifier
        self._scenarios: dict[str, Scenario] = dict(scenarios if scenarios is not None else SCENARIOS)

    def names(self) -> list:
        return list(self._scenarios.keys())

    def get(self, name: str) -> Scenario:
        if name not in self._scenarios:
            raise UnknownScenarioError(name, self.names())
        return self._scenarios[name]

    def __contains__(self, name: str) -> bool:
        return name in self._scenarios

    def apply(self, name: str) -> CostResult:
        """
        Replace the scenario's parameters in the store and recalculate.

        Raises:
            UnknownScenarioError: No scenario with that name
            RangeViolation: A scenario value is outside the hard bounds
                (store left untouched)
        """
        scenario = self.get(name)
        old_parameters = self.store.values()

        results = self.store.replace(scenario.values)

        logger.info("Applied scenario %s (total %s)", name, format_currency(results.total))
        self.notifier.emit(
            ChangeEvent.SCENARIO_APPLIED,
            ScenarioApplied(
                scenario_name=name,
                old_parameters=old_parameters,
                new_parameters=self.store.values()
            )
        )
        return results

    def preview(self, name: str) -> CostResult:
        """Result the scenario would produce, without touching the store."""
        scenario = self.get(name)
        merged = {**self.store.values(), **scenario.values}
        return self.store.calculation.calculate_or_error(merged)

    def closest_scenario(self, current: Optional[Mapping[str, float]] = None) -> ScenarioMatch:
        """
        Scenario with the smallest normalized distance to ``current``.

        Distance sums ``|current - scenario| / scenario`` over the keys both
        define; zero-valued scenario entries are skipped. Ties keep
        definition order.
        """
        if current is None:
            current = self.store.values()

        best_name = None
        best_distance = float("inf")

        for key, scenario in self._scenarios.items():
            distance = 0.0
            for param, target in scenario.values.items():
                if param not in current or target == 0:
                    continue
                distance += abs(current[param] - target) / abs(target)
            if distance < best_distance:
                best_distance = distance
                best_name = key

        if best_name is None:
            raise ValueError("No scenarios defined")

        key_count = len(current) or 1
        return ScenarioMatch(
            name=best_name,
            similarity=1 - (best_distance / key_count),
            distance=best_distance
        )

    def compare(self) -> list:
        """Preview every scenario against the current result."""
        current_total = self.store.results.total
        closest = self.closest_scenario().name
        rows = []

        for key, scenario in self._scenarios.items():
            result = self.preview(key)
            delta = result.total - current_total
            rows.append(ScenarioComparison(
                key=key,
                name=scenario.name,
                total=result.total,
                gdp_percentage=result.gdp_percentage,
                delta_from_current=delta,
                delta_percent=(delta / current_total * 100) if current_total else 0.0,
                is_closest=(key == closest)
            ))

        return rows

    def format_comparison_markdown(self, rows: Optional[list] = None) -> str:
        """Format a scenario comparison as a markdown table."""
        if rows is None:
            rows = self.compare()

        lines = [
            "| Scenario | Total | % of GDP | Δ vs current (%) |",
            "|----------|-------|----------|------------------|"
        ]

        for row in rows:
            label = f"**{row.name}**" if row.is_closest else row.name
            lines.append(
                f"| {label} | {format_currency(row.total)} | "
                f"{format_percentage(row.gdp_percentage)} | {row.delta_percent:+.1f}% |"
            )

        return "\n".join(lines)
