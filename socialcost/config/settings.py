"""
Settings Management with Pydantic

Provides type-safe configuration for the calculator with:
- Environment variable support (``SOCIALCOST_*``)
- Validation of economic and visual constants
- Separate sections for calculation and distribution behaviour
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CalculationConfig(BaseSettings):
    """Economic constants used by the cost formulas."""
    model_config = SettingsConfigDict(
        env_prefix="SOCIALCOST_CALC_",
        extra="ignore"
    )

    us_gdp: float = Field(default=24_000_000_000_000, gt=0)
    life_expectancy: float = Field(default=75, gt=0)
    national_population: int = Field(default=331_000_000, gt=0)

    # Fraction of the previous total that counts as a significant change
    significant_change_threshold: float = Field(default=0.1, ge=0)

    # ~15% of the US population
    max_plausible_cases: int = Field(default=50_000_000, gt=0)

    result_tolerance: float = Field(default=1e-6, gt=0)


class DistributionConfig(BaseSettings):
    """Shape and caching parameters for the uncertainty curves."""
    model_config = SettingsConfigDict(
        env_prefix="SOCIALCOST_DIST_",
        extra="ignore"
    )

    spread_factor: float = Field(default=0.12, gt=0)
    sample_points: int = Field(default=100, ge=2)
    peak_compression: float = Field(default=0.6, gt=0)
    peak_height_ratio: float = Field(default=0.9, gt=0, le=1)

    min_position: float = Field(default=0.01, ge=0, le=1)
    max_position: float = Field(default=0.99, ge=0, le=1)

    # Share of the hard-bound span added on each side of the display range
    display_margin: float = Field(default=0.1, ge=0)

    cache_capacity: int = Field(default=50, ge=1)

    # Relative distance from the default treated as "at consensus"
    consensus_tolerance: float = Field(default=0.05, ge=0)


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="SOCIALCOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_name: str = "Social Media Cost Calculator"
    debug: bool = False
    log_level: str = "INFO"

    calculation: CalculationConfig = Field(default_factory=CalculationConfig)
    distribution: DistributionConfig = Field(default_factory=DistributionConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            calculation=CalculationConfig(),
            distribution=DistributionConfig()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
