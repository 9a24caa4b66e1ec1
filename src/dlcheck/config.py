# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Harness configuration model and TOML loading."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

CONFIG_FILENAME: Final[str] = "dlcheck.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "dlcheck"

_PATH_FIELDS: Final[tuple[str, ...]] = ("output_root", "script_source", "maven_repo", "android_home")
_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class HarnessConfig(BaseModel):
    """Locations and launcher settings shared by every test case."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    output_root: Path = Path("download_artifacts_test_output")
    script_source: Path = Path("download_artifacts.gradle")
    maven_repo: Path = Path("download_artifacts_test_assets/m2repository")
    android_home: Path = Path()
    extra_repositories: list[str] = Field(default_factory=list)
    tool_command: tuple[str, ...] = ("gradle", "-b")
    fresh_environments: bool = False
    emoji: bool = True

    @field_validator("tool_command", mode="before")
    @classmethod
    def _coerce_tool_command(cls, value: Any) -> tuple[str, ...]:
        """Return ``value`` coerced into a non-empty tuple of argument strings.

        Raises:
            ValueError: If no launcher executable is provided.
        """

        if isinstance(value, str):
            value = value.split()
        command = tuple(str(entry) for entry in value)
        if not command:
            raise ValueError("tool_command requires at least the launcher executable")
        return command

    def anchored(self, base_dir: Path) -> HarnessConfig:
        """Return a copy whose relative paths are resolved against ``base_dir``."""

        updates = {
            name: (path if path.is_absolute() else base_dir / path).resolve()
            for name in _PATH_FIELDS
            if isinstance(path := getattr(self, name), Path)
        }
        return self.model_copy(update=updates)

    def repository_uris(self) -> list[str]:
        """Return the ordered repository URIs handed to the download tool."""

        return [self.maven_repo.resolve().as_uri(), *self.extra_repositories]


def _expand_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), value)
    if isinstance(value, Mapping):
        return {key: _expand_env(entry, env) for key, entry in value.items()}
    if isinstance(value, list):
        return [_expand_env(entry, env) for entry in value]
    return value


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc


def _load_section(path: Path) -> dict[str, Any]:
    document = _read_toml(path)
    if path.name != PYPROJECT_FILENAME:
        return document
    section = document.get(PYPROJECT_TOOL_KEY, {}).get(PYPROJECT_SECTION_KEY, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return dict(section)


def discover_config(root: Path) -> Path | None:
    """Return the configuration file found in ``root``, if any.

    ``dlcheck.toml`` takes precedence over a ``pyproject.toml`` that carries a
    ``[tool.dlcheck]`` table.
    """

    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file():
        section = _read_toml(pyproject).get(PYPROJECT_TOOL_KEY, {})
        if isinstance(section, Mapping) and PYPROJECT_SECTION_KEY in section:
            return pyproject
    return None


def load_config(
    path: Path | None = None,
    *,
    root: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> HarnessConfig:
    """Load harness configuration and anchor its paths.

    Relative paths are resolved against the directory holding the
    configuration file, or against ``root`` when no file is used.

    Args:
        path: Explicit configuration file; discovered under ``root`` when omitted.
        root: Directory used for discovery and as the default anchor.
        env: Environment used to expand ``$VAR`` references.

    Returns:
        HarnessConfig: Validated configuration with absolute paths.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """

    base = (root or Path.cwd()).resolve()
    source = path if path is not None else discover_config(base)
    if source is None:
        return HarnessConfig().anchored(base)
    if not source.is_file():
        raise ConfigError(f"Configuration file not found: {source}")
    data = _expand_env(_load_section(source), env if env is not None else os.environ)
    try:
        config = HarnessConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source}:\n{exc}") from exc
    return config.anchored(source.resolve().parent)


__all__ = ["CONFIG_FILENAME", "HarnessConfig", "discover_config", "load_config"]
