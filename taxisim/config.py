"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- TAXISIM_SCENARIO_DATA_DIR=/path/to/data
- TAXISIM_SCENARIO_FILE_NAME=input.txt
- TAXISIM_DISPATCH_DECLINE_PROBABILITY=0.3
- TAXISIM_DISPATCH_SEED=42
- TAXISIM_DISPATCH_TARIFFS='{"QnQ": {"booking_fee": 14.5, "pickup_rate": 0.2}}'
- TAXISIM_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError

from .domain.models import Tariff


class TariffSettings(BaseModel):
    """Pricing for one company as read from settings."""

    booking_fee: float = Field(ge=0)
    pickup_rate: float = Field(ge=0)

    def to_tariff(self) -> Tariff:
        return Tariff(booking_fee=self.booking_fee, pickup_rate=self.pickup_rate)


def _default_tariffs() -> Dict[str, TariffSettings]:
    return {
        "QnQ": TariffSettings(booking_fee=14.50, pickup_rate=0.20),
        "Shopify": TariffSettings(booking_fee=16.00, pickup_rate=0.15),
    }


class ScenarioConfig(BaseSettings):
    """Scenario input configuration.

    Environment variables prefixed with TAXISIM_SCENARIO_.
    """

    model_config = SettingsConfigDict(env_prefix="TAXISIM_SCENARIO_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    file_name: str = "Input.txt"
    strict_weights: bool = True
    # Companies assigned, in order, to shop sections whose header names none.
    section_companies: List[str] = Field(default_factory=lambda: ["QnQ", "Shopify"])

    @property
    def scenario_path(self) -> Path:
        """Full path to the scenario file."""
        return self.data_dir / self.file_name


class DispatchConfig(BaseSettings):
    """Dispatch and pricing configuration.

    Environment variables prefixed with TAXISIM_DISPATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="TAXISIM_DISPATCH_")

    decline_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    seed: Optional[int] = None
    currency_symbol: str = "R"
    default_company: str = "QnQ"
    search_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    tariffs: Dict[str, TariffSettings] = Field(default_factory=_default_tariffs)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TAXISIM_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TAXISIM_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.dispatch.decline_probability)
        print(config.scenario.scenario_path)

    Environment variables prefixed with TAXISIM_.
    """

    model_config = SettingsConfigDict(env_prefix="TAXISIM_")

    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If an environment override fails validation.
    """
    try:
        return AppConfig()
    except ValidationError as e:
        first = e.errors()[0]
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            message=f"Invalid setting {setting or '<unknown>'}",
            setting_name=setting,
            expected_type=first.get("type"),
            cause=e,
        ) from e


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
