"""
Parameter Store

Owns the current parameter values and the last calculation result.
Every mutation is validated before anything changes, then triggers one
recalculation and the matching change events.
"""

import logging
from typing import Mapping, Optional, Union

from .config.settings import CalculationConfig
from .core.entities import CostResult, ParameterName
from .core.errors import InvalidInputError
from .core.parameters import default_parameters, is_finite_number, parameter_key
from .engine.calculation import CalculationEngine
from .engine.validation import ValidationEngine
from .events.notifier import (
    ChangeEvent,
    ChangeNotifier,
    ParameterChanged,
    ParametersUpdated,
    SignificantChange,
)

logger = logging.getLogger(__name__)


class ParameterStore:
    """
    Mutable parameter state behind a validating facade.

    Invariant: after any successful call every value is finite and inside
    its hard bounds, and ``results`` reflects the current values.
    """

    def __init__(
        self,
        calculation: Optional[CalculationEngine] = None,
        validation: Optional[ValidationEngine] = None,
        notifier: Optional[ChangeNotifier] = None,
        config: Optional[CalculationConfig] = None
    ):
        self.config = config or CalculationConfig()
        self.calculation = calculation or CalculationEngine(self.config)
        self.validation = validation or ValidationEngine(self.config)
        self.notifier = notifier or ChangeNotifier()

        self._values: dict[str, float] = default_parameters()
        self._results: CostResult = self.calculation.calculate_or_error(self._values)

    # Reads

    def get(self, name: Union[str, ParameterName]) -> float:
        return self._values[parameter_key(name)]

    def values(self) -> dict:
        """Copy of the current parameter set."""
        return dict(self._values)

    @property
    def results(self) -> CostResult:
        return self._results

    def snapshot(self) -> dict:
        """Current state for debugging and logging."""
        return {
            "parameters": self.values(),
            "results": self._results.to_dict(),
            "warnings": [w.message for w in self.validation.validate_soft(self._values)],
        }

    # Writes

    def _normalize(self, values: Mapping) -> dict:
        normalized = {}
        for name, value in values.items():
            key = parameter_key(name)
            if not is_finite_number(value):
                raise InvalidInputError(key, value)
            normalized[key] = value
        return normalized

    def _recalculate(self) -> CostResult:
        self._results = self.calculation.calculate_or_error(self._values)
        logger.debug("Recalculated total: %s", self._results.total)
        return self._results

    def _relative_change(self, previous: CostResult, current: CostResult) -> Optional[float]:
        """Relative swing of the total, or None when it is below the threshold."""
        if previous.total == 0:
            return float("inf") if current.total != 0 else None
        change = abs((current.total - previous.total) / previous.total)
        if change > self.config.significant_change_threshold:
            return change
        return None

    def update(self, name: Union[str, ParameterName], value: float) -> CostResult:
        """
        Set one parameter and recalculate.

        Raises:
            UnknownParameterError: Unknown parameter name
            InvalidInputError: Non-finite value
            RangeViolation: Value outside the hard bounds (previous value kept)
        """
        key = parameter_key(name)
        try:
            self.validation.validate_value(key, value)
        except ValueError:
            logger.warning("Rejected update %s = %r", key, value)
            raise

        old_value = self._values[key]
        previous = self._results

        self._values[key] = value
        results = self._recalculate()

        self.notifier.emit(
            ChangeEvent.PARAMETER_CHANGED,
            ParameterChanged(parameter=key, old_value=old_value, new_value=value)
        )

        self._emit_if_significant(key, previous, results)
        return results

    def _emit_if_significant(self, parameter: str, previous: CostResult, results: CostResult) -> None:
        change = self._relative_change(previous, results)
        if change is None:
            return
        logger.info("Significant change in total cost after %s update (%.1f%%)", parameter, change * 100)
        self.notifier.emit(
            ChangeEvent.SIGNIFICANT_CHANGE,
            SignificantChange(parameter=parameter, results=results, relative_change=change)
        )

    def update_many(self, values: Mapping) -> CostResult:
        """
        Set several parameters at once.

        The merged set is validated before any value changes, so a single
        violation leaves the store untouched. A significant swing in the
        total is reported with the changed names joined by commas.
        """
        changes = self._normalize(values)
        merged = {**self._values, **changes}
        self.validation.validate_hard(merged)

        previous = self._results
        self._values = merged
        results = self._recalculate()

        self.notifier.emit(
            ChangeEvent.PARAMETERS_UPDATED,
            ParametersUpdated(changed=changes, results=results)
        )
        self._emit_if_significant(", ".join(changes), previous, results)
        return results

    def replace(self, values: Mapping) -> CostResult:
        """
        Swap in a parameter set without emitting events.

        Names not in ``values`` keep their current value. Used by the
        scenario manager, which emits its own event.
        """
        changes = self._normalize(values)
        merged = {**self._values, **changes}
        self.validation.validate_hard(merged)

        self._values = merged
        return self._recalculate()

    def reset(self) -> CostResult:
        """Restore the research-consensus defaults."""
        self._values = default_parameters()
        return self._recalculate()
