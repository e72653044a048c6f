"""
Configuration Management

Centralized configuration for:
- Economic constants (GDP, life expectancy, population)
- Distribution curve shape and cache sizing
- Logging
"""

import logging

from .settings import (
    Settings,
    CalculationConfig,
    DistributionConfig,
    get_settings
)

LOG_FORMAT = "%(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts and demos."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


__all__ = [
    "Settings",
    "CalculationConfig",
    "DistributionConfig",
    "get_settings",
    "configure_logging",
    "LOG_FORMAT"
]
