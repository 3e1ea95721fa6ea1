"""
Settings

Where to look for providers and how to run them. Values come from the
environment and can be overridden explicitly (the CLI passes its options).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ral.domain import Ok, Result, error
from ral.providers.base.executor import ExecutionConfig

PROVIDER_PATH_VAR = "RAL_PROVIDER_PATH"
TIMEOUT_VAR = "RAL_TIMEOUT"
NOOP_VAR = "RAL_NOOP"
LOG_LEVEL_VAR = "RAL_LOG_LEVEL"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class RalSettings(BaseModel):
    """Runtime settings

    Attributes:
        provider_paths: Directories scanned for ``*.prov`` executables
        log_level: Minimum level for log output
        execution: Timeout and noop settings passed to external providers
    """

    provider_paths: list[Path] = Field(default_factory=list)
    log_level: str = "WARNING"
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)

    @field_validator("log_level")
    @classmethod
    def _valid_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(sorted(_LOG_LEVELS))}")
        return level


def load_settings(
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> Result[RalSettings]:
    """Build settings from the environment, then apply non-None overrides.

    Recognised overrides: ``provider_paths``, ``log_level``,
    ``timeout_seconds`` and ``noop``.
    """
    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {"execution": {}}
    if env.get(PROVIDER_PATH_VAR):
        raw["provider_paths"] = [p for p in env[PROVIDER_PATH_VAR].split(os.pathsep) if p]
    if env.get(LOG_LEVEL_VAR):
        raw["log_level"] = env[LOG_LEVEL_VAR]
    if env.get(TIMEOUT_VAR):
        raw["execution"]["timeout_seconds"] = env[TIMEOUT_VAR]
    if env.get(NOOP_VAR):
        raw["execution"]["noop"] = env[NOOP_VAR]

    for key in ("provider_paths", "log_level"):
        if overrides.get(key) is not None:
            raw[key] = overrides[key]
    for key in ("timeout_seconds", "noop"):
        if overrides.get(key) is not None:
            raw["execution"][key] = overrides[key]

    try:
        return Ok(RalSettings.model_validate(raw))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        return error(f"invalid settings: {details}")
