"""
Cost Calculator - Composition Root

Wires the engines, the parameter store, the distribution model and the
scenario manager into one explicit context object. This is the surface a
UI layer talks to.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from .config.settings import Settings, get_settings
from .core.entities import CommunityImpact, ConfidenceInterval, CostResult, DistributionCurve, ParameterName
from .core.errors import InvalidInputError, UnknownScenarioError
from .core.formatting import format_parameter_value
from .core.parameters import is_finite_number, parameter_key
from .engine.calculation import CalculationEngine
from .engine.distributions import DistributionModel
from .engine.validation import ValidationEngine
from .events.notifier import ChangeEvent, ChangeNotifier
from .scenarios.manager import ScenarioManager, ScenarioMatch
from .store import ParameterStore

logger = logging.getLogger(__name__)


class CostCalculator:
    """
    Explicit calculator context.

    Responsibilities:
    - Own one notifier, engine set, store, distribution model and scenario manager
    - Expose parameter updates, scenarios, curves and intervals to the UI
    - Scale national results down to a community
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self.notifier = ChangeNotifier()
        self.calculation = CalculationEngine(self.settings.calculation)
        self.validation = ValidationEngine(self.settings.calculation)
        self.store = ParameterStore(
            calculation=self.calculation,
            validation=self.validation,
            notifier=self.notifier,
            config=self.settings.calculation
        )
        self.distributions = DistributionModel(self.store.get, self.settings.distribution)
        self.scenarios = ScenarioManager(self.store, self.notifier)

    # Parameters

    @property
    def results(self) -> CostResult:
        return self.store.results

    @property
    def parameters(self) -> dict:
        return self.store.values()

    def get_parameter(self, name: Union[str, ParameterName]) -> float:
        return self.store.get(name)

    def update_parameter(self, name: Union[str, ParameterName], value: float) -> CostResult:
        return self.store.update(name, value)

    def update_parameters(self, values: Mapping) -> CostResult:
        return self.store.update_many(values)

    def reset(self) -> CostResult:
        return self.store.reset()

    def calculate(self) -> CostResult:
        """Recalculate from the current values without changing them."""
        return self.calculation.calculate_or_error(self.store.values())

    def formatted_parameter(self, name: Union[str, ParameterName]) -> str:
        key = parameter_key(name)
        return format_parameter_value(key, self.store.get(key))

    # Scenarios

    def apply_scenario(self, name: str) -> bool:
        """Apply a scenario. Returns False (and changes nothing) for an unknown name."""
        try:
            self.scenarios.apply(name)
        except UnknownScenarioError as e:
            logger.error("Cannot apply scenario: %s", e)
            return False
        return True

    def closest_scenario(self) -> ScenarioMatch:
        return self.scenarios.closest_scenario()

    # Uncertainty

    def curve(self, name: Union[str, ParameterName], width: float, height: float) -> DistributionCurve:
        return self.distributions.curve(name, width, height)

    def confidence_interval(self, name: Union[str, ParameterName]) -> ConfidenceInterval:
        return self.distributions.confidence_interval(name)

    def warnings(self) -> list:
        return self.validation.validate_soft(self.store.values())

    # Community scaling

    def calculate_community_impact(self, population: int, region: str = "national") -> CommunityImpact:
        """
        Scale the current national result linearly to a community.

        Raises:
            InvalidInputError: Population is not a positive finite number
        """
        if not is_finite_number(population) or population <= 0:
            raise InvalidInputError("population", population, "must be a positive number")

        scaling = population / self.settings.calculation.national_population
        results = self.store.results
        params = self.store.values()

        return CommunityImpact(
            population=population,
            region=region,
            scaling_factor=scaling,
            total_cost=results.total * scaling,
            mortality=results.mortality * scaling,
            mental_health=results.mental_health * scaling,
            healthcare_productivity=results.healthcare_productivity * scaling,
            affected_people=round(params["depression"] * scaling),
            excess_deaths=round(params["suicides"] * (params["attribution"] / 100) * scaling)
        )

    # Events

    def on(self, event: Union[str, ChangeEvent], handler: Callable[[Any], None]) -> Callable[[Any], None]:
        return self.notifier.on(event, handler)

    def off(self, event: Union[str, ChangeEvent], handler: Callable[[Any], None]) -> bool:
        return self.notifier.off(event, handler)

    def snapshot(self) -> dict:
        return self.store.snapshot()


def create_calculator(settings: Optional[Settings] = None) -> CostCalculator:
    """Create a calculator with the given (or environment) settings."""
    return CostCalculator(settings)
