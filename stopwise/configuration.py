"""Mini README: Runtime configuration for the Stopwise route engine.

Structure:
    * StopwiseSettings - pydantic-settings model read from ``STOPWISE_*``
      environment variables or a local ``.env`` file.
    * get_settings - cached accessor so validation runs once per process.

Usage:
    The sequencing pipeline reads its default search limits and dwell time
    from here, the provider registry reads OSRM connection details, and the
    CLI/web interface read bind addresses and the default provider.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StopwiseSettings(BaseSettings):
    """Runtime configuration for route sequencing and its host surfaces."""

    model_config = SettingsConfigDict(
        env_prefix="STOPWISE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root log level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    default_provider: str = Field(
        "straight_line",
        description="Routing provider used when a request does not name one.",
    )
    default_travel_mode: str = Field(
        "driving",
        description="Travel mode for leg resolution: 'driving' or 'walking'.",
    )
    default_dwell_seconds: float = Field(
        900.0,
        description="Time spent at each stop when the input does not say otherwise.",
        ge=0.0,
    )
    max_improvement_passes: int = Field(
        1000,
        description="Upper bound on full 2-opt passes before the best tour so far is returned.",
        ge=1,
    )
    improvement_time_budget_seconds: Optional[float] = Field(
        5.0,
        description="Wall-clock budget for 2-opt refinement. Unset disables the budget.",
        gt=0.0,
    )
    concurrent_leg_requests: bool = Field(
        False,
        description="Resolve all legs concurrently instead of one after another.",
    )
    osrm_base_url: str = Field(
        "https://router.project-osrm.org",
        description="Base URL of the OSRM server used by the 'osrm' provider.",
    )
    osrm_timeout_seconds: float = Field(10.0, gt=0.0)
    osrm_max_retries: int = Field(2, ge=0)
    osrm_backoff_seconds: float = Field(0.5, ge=0.0)
    straight_line_detour_factor: float = Field(
        1.3,
        description="Multiplier applied to great-circle distance by the offline provider.",
        ge=1.0,
    )

    @field_validator("default_travel_mode", mode="before")
    @classmethod
    def _normalise_mode(cls, value: str) -> str:
        mode = str(value).strip().lower()
        if mode not in {"driving", "walking"}:
            raise ValueError(f"Unsupported travel mode: {value}")
        return mode

    @field_validator("osrm_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache()
def get_settings() -> StopwiseSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return StopwiseSettings()
