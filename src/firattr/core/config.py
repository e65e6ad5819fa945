"""
Project configuration models.

Parses firattr.toml and provides typed configuration for the compiler:

    [actions]
    doSave = "save()"

    [compile]
    on_error = "skip"
"""

from __future__ import annotations

import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from firattr.core.errors import ConfigError

CONFIG_FILENAME = "firattr.toml"


class ErrorPolicy(StrEnum):
    """What the element compiler does with an attribute it cannot translate."""

    RAISE = "raise"
    SKIP = "skip"


class CompileConfig(BaseModel):
    """The [compile] section."""

    on_error: ErrorPolicy = Field(default=ErrorPolicy.RAISE, description="raise or skip bad attributes")

    model_config = ConfigDict(frozen=True, extra="forbid")


class FirattrConfig(BaseModel):
    """Full firattr.toml contents."""

    actions: dict[str, str] = Field(default_factory=dict, description="Global actions map")
    compile: CompileConfig = Field(default_factory=CompileConfig)

    model_config = ConfigDict(frozen=True, extra="ignore")

    def actions_with(self, overrides: dict[str, str] | None = None) -> dict[str, str]:
        """Global actions overlaid with per-call entries."""
        merged = dict(self.actions)
        if overrides:
            merged.update(overrides)
        return merged


def load_config(toml_path: Path) -> FirattrConfig:
    """
    Load configuration from firattr.toml.

    Args:
        toml_path: Path to the file; a directory is searched for firattr.toml

    Returns:
        FirattrConfig with parsed values, or defaults if the file is absent

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values.
    """
    if toml_path.is_dir():
        toml_path = toml_path / CONFIG_FILENAME
    if not toml_path.exists():
        return FirattrConfig()

    try:
        with open(toml_path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{toml_path}: invalid TOML: {e}") from e

    try:
        return FirattrConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{toml_path}: {e}") from e
