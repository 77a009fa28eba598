"""Policy defaults, presets and service settings."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from retirement_estimator.constants import (
    CONFIG_ENV_VAR,
    MODERATE_WITHDRAWAL_RATE,
    SAFE_WITHDRAWAL_RATE,
)


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be loaded or parsed."""


class ProjectionDefaults(BaseModel):
    """Values applied once, during input preparation, to fields the user left unset."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cppBenefit: float = Field(1433.0, ge=0, description="Monthly CPP amount.")
    oasBenefit: float = Field(727.67, ge=0, description="Monthly OAS amount.")
    yearsInRetirement: int = Field(25, ge=1)
    inflationRate: float = 0.025
    incomeGrowthRate: float = 0.021
    incomeReplacementRatio: float = Field(0.70, ge=0, le=2)
    preRetirementReturn: float = 0.06
    retirementReturn: float = 0.05


class RiskThresholds(BaseModel):
    """Withdrawal-rate bounds; each is the inclusive upper bound of its class."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    safe_max: float = SAFE_WITHDRAWAL_RATE
    moderate_max: float = MODERATE_WITHDRAWAL_RATE

    @model_validator(mode="after")
    def ensure_ordered(self) -> "RiskThresholds":
        if self.safe_max > self.moderate_max:
            raise ValueError("safe_max must not exceed moderate_max")
        return self


class ReturnPreset(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    preRetirementReturn: float
    retirementReturn: float


def _default_return_presets() -> Dict[str, ReturnPreset]:
    # midpoints of the advertised ranges; same rate before and after retirement
    return {
        "conservative": ReturnPreset(preRetirementReturn=0.045, retirementReturn=0.045),
        "balanced": ReturnPreset(preRetirementReturn=0.065, retirementReturn=0.065),
        "growth": ReturnPreset(preRetirementReturn=0.085, retirementReturn=0.085),
    }


def _default_lifestyle_ratios() -> Dict[str, float]:
    return {"conservative": 0.60, "balanced": 0.70, "maintain": 0.80}


class ApiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    allowed_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )
    log_level: str = "INFO"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    defaults: ProjectionDefaults = Field(default_factory=ProjectionDefaults)
    risk_thresholds: RiskThresholds = Field(default_factory=RiskThresholds)
    return_presets: Dict[str, ReturnPreset] = Field(default_factory=_default_return_presets)
    lifestyle_ratios: Dict[str, float] = Field(default_factory=_default_lifestyle_ratios)
    api: ApiSettings = Field(default_factory=ApiSettings)


def load_config_from_json(file_path: str) -> Dict[str, Any]:
    """Loads and returns the configuration dictionary from a JSON file."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Configuration file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing JSON file '{file_path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Unexpected error reading config file '{file_path}': {e}") from e


def load_settings(file_path: Optional[str] = None) -> Settings:
    """
    Build Settings from a JSON file.

    The path comes from the argument, else from the RETIREMENT_ESTIMATOR_CONFIG
    environment variable; with neither, the built-in defaults are returned.
    """
    path = file_path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Settings()

    raw = load_config_from_json(path)
    try:
        settings = Settings.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in '{path}': {e}") from e

    logger.info(f"Loaded settings from {path}")
    if settings.defaults.retirementReturn > settings.defaults.preRetirementReturn:
        logger.warning(
            "Default retirement return ({:.2%}) exceeds pre-retirement return ({:.2%})",
            settings.defaults.retirementReturn,
            settings.defaults.preRetirementReturn,
        )
    return settings


DEFAULT_SETTINGS = Settings()
