"""Configuration for problem document support."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATUS_SOURCE = "problem_databind.status:Status"


class ProblemSettings(BaseSettings):
    """Settings a :class:`~problem_databind.module.ProblemModule` can be built from."""

    stack_traces: bool = Field(
        default=False,
        description="Emit the captured stack of raised problems as 'stacktrace'",
    )
    status_sources: list[str] = Field(
        default_factory=lambda: [DEFAULT_STATUS_SOURCE],
        description="Import paths ('package.module:attribute') of status enumerations to index",
    )

    model_config = SettingsConfigDict(env_prefix="PROBLEM_")

    @field_validator("status_sources")
    @classmethod
    def _validate_sources(cls, value: list[str]) -> list[str]:
        for path in value:
            module_name, _, attribute = path.partition(":")
            if not module_name or not attribute:
                raise ValueError(f"Status source '{path}' must look like 'package.module:attribute'")
        return value


def load_settings() -> ProblemSettings:
    """Load settings from the environment."""
    try:
        return ProblemSettings()
    except ValidationError as err:
        raise RuntimeError(f"Invalid configuration: {err}") from err


@lru_cache(maxsize=1)
def get_settings() -> ProblemSettings:
    """Cached accessor used by production code."""
    return load_settings()


__all__ = [
    "DEFAULT_STATUS_SOURCE",
    "ProblemSettings",
    "get_settings",
    "load_settings",
]
