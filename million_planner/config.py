import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from million_planner.constants import MAX_SIMULATION_MONTHS

ENV_PREFIX = "MILLION_"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when the service settings cannot be loaded or parsed."""


class Settings(BaseModel):
    """Runtime settings for the API, read from MILLION_* environment variables."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cors_origins: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),
        description="Origins allowed to call /api/*.",
    )
    log_level: str = Field("INFO", description="Minimum loguru level for all sinks.")
    log_file: Optional[str] = Field(None, description="Optional path of a rotating log file.")
    max_months: int = Field(
        MAX_SIMULATION_MONTHS,
        gt=0,
        description="Longest breakdown the engine will simulate, in months.",
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level '{v}'")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or the given mapping)."""
    env = os.environ if environ is None else environ
    raw = {}

    origins = env.get(f"{ENV_PREFIX}CORS_ORIGINS")
    if origins is not None:
        raw["cors_origins"] = [origin.strip() for origin in origins.split(",") if origin.strip()]
    if f"{ENV_PREFIX}LOG_LEVEL" in env:
        raw["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]
    if env.get(f"{ENV_PREFIX}LOG_FILE"):
        raw["log_file"] = env[f"{ENV_PREFIX}LOG_FILE"]
    if f"{ENV_PREFIX}MAX_MONTHS" in env:
        raw["max_months"] = env[f"{ENV_PREFIX}MAX_MONTHS"]

    try:
        return Settings.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {ENV_PREFIX}* environment settings: {e}") from e
