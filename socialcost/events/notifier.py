"""
Change Notifier - Synchronous Publish/Subscribe

Informs external collaborators (UI, logging, analytics) about:
- Single parameter changes
- Bulk parameter updates
- Significant swings in the total cost
- Scenario applications

Handlers run synchronously in registration order. A failing handler is
logged and skipped; it never prevents the remaining handlers from running.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Union

logger = logging.getLogger(__name__)


class ChangeEvent(str, Enum):
    """Events emitted by the calculator."""
    PARAMETER_CHANGED = "parameter_changed"
    PARAMETERS_UPDATED = "parameters_updated"
    SIGNIFICANT_CHANGE = "significant_change"
    SCENARIO_APPLIED = "scenario_applied"


@dataclass
class ParameterChanged:
    """Payload of ``parameter_changed``."""
    parameter: str
    old_value: float
    new_value: float
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class ParametersUpdated:
    """Payload of ``parameters_updated``."""
    changed: dict = field(default_factory=dict)
    results: Any = None
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class SignificantChange:
    """Payload of ``significant_change``."""
    parameter: str
    results: Any = None
    relative_change: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class ScenarioApplied:
    """Payload of ``scenario_applied``."""
    scenario_name: str
    old_parameters: dict = field(default_factory=dict)
    new_parameters: dict = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


Handler = Callable[[Any], None]


class ChangeNotifier:
    """
    Observer registry shared by the store and the scenario manager.

    Responsibilities:
    - Register and remove handlers per event
    - Dispatch payloads in registration order
    - Isolate handler failures
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._emit_counts: dict[str, int] = defaultdict(int)

    @staticmethod
    def _key(event: Union[str, ChangeEvent]) -> str:
        return event.value if isinstance(event, ChangeEvent) else str(event)

    def on(self, event: Union[str, ChangeEvent], handler: Handler) -> Handler:
        """Register a handler. Returns the handler so it can be used as a decorator."""
        if not callable(handler):
            raise TypeError(f"Handler for {self._key(event)} must be callable")
        self._handlers[self._key(event)].append(handler)
        return handler

    def off(self, event: Union[str, ChangeEvent], handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        handlers = self._handlers.get(self._key(event), [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def emit(self, event: Union[str, ChangeEvent], payload: Any = None) -> int:
        """
        Dispatch a payload to every handler of an event.

        Returns:
            Number of handlers that completed without raising
        """
        key = self._key(event)
        self._emit_counts[key] += 1

        # Copy so handlers may unsubscribe while being dispatched
        handlers = list(self._handlers.get(key, []))
        completed = 0

        for handler in handlers:
            try:
                handler(payload)
                completed += 1
            except Exception:
                logger.exception("Error in event handler for %s", key)

        return completed

    def handler_count(self, event: Optional[Union[str, ChangeEvent]] = None) -> int:
        if event is None:
            return sum(len(h) for h in self._handlers.values())
        return len(self._handlers.get(self._key(event), []))

    def emit_count(self, event: Union[str, ChangeEvent]) -> int:
        return self._emit_counts.get(self._key(event), 0)

    def clear(self) -> None:
        """Remove every handler."""
        self._handlers.clear()
