# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative test case models and per-iteration run results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import VerificationStep

ArtifactSpec = dict[str, str | None]


def _is_relative(value: str) -> bool:
    return not (PurePosixPath(value).is_absolute() or PureWindowsPath(value).is_absolute())


class TestCase(BaseModel):
    """Describe one invocation of the download tool and the outcome it must produce.

    ``artifacts`` maps each expected output path, relative to the test case's
    working directory, to a reference path relative to the maven repository
    root. A ``None`` reference only requires the output to exist.
    ``expected_report`` lists rendered report sections; ``None`` skips the
    report check altogether.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    packages: str
    artifacts: ArtifactSpec = Field(default_factory=dict)
    expected_report: tuple[str, ...] | None = None
    iterations: int = Field(default=1, ge=1)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        """Return ``value`` when it can name a single working directory.

        Raises:
            ValueError: If the name is empty or contains path separators.
        """

        if not value or value in {".", ".."} or "/" in value or "\\" in value:
            raise ValueError(f"test case name {value!r} must be a single directory name")
        return value

    @field_validator("artifacts")
    @classmethod
    def _validate_artifacts(cls, value: ArtifactSpec) -> ArtifactSpec:
        """Reject absolute output or reference paths.

        Raises:
            ValueError: If any path in the mapping is absolute.
        """

        for output, reference in value.items():
            if not _is_relative(output):
                raise ValueError(f"expected output {output!r} must be a relative path")
            if reference is not None and not _is_relative(reference):
                raise ValueError(f"reference {reference!r} must be a relative path")
        return value

    def task_name(self, iteration: int) -> str:
        """Return the invocation name of the one-based ``iteration``.

        Repeated cases suffix the iteration number so each run has a distinct
        identity while sharing the same working directory.
        """

        return f"{self.name}{iteration}" if self.iterations > 1 else self.name


@dataclass(frozen=True, slots=True)
class ResolvedArtifacts:
    """Expected outputs resolved to absolute paths for one working directory."""

    outputs: Mapping[Path, Path | None]

    @classmethod
    def resolve(cls, declared: Mapping[str, str | None], *, target_dir: Path, repository_root: Path) -> ResolvedArtifacts:
        """Resolve ``declared`` against the working directory and the reference repository.

        Args:
            declared: Relative output paths mapped to relative reference paths.
            target_dir: Working directory the tool writes into.
            repository_root: Root of the reference maven repository.

        Returns:
            ResolvedArtifacts: Absolute output paths mapped to absolute references.
        """

        return cls(
            outputs={
                target_dir / output: (repository_root / reference if reference is not None else None)
                for output, reference in declared.items()
            },
        )

    @property
    def files(self) -> list[Path]:
        """Return the expected output files in declaration order."""

        return list(self.outputs)


@dataclass(slots=True)
class RunResult:
    """Outcome of a single iteration of a test case."""

    task_name: str
    iteration: int
    output: str
    output_files: list[Path] = field(default_factory=list)
    steps: dict[VerificationStep, bool] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        """Return ``True`` when every executed verification step passed."""

        return all(self.steps.values())


__all__ = ["ArtifactSpec", "ResolvedArtifacts", "RunResult", "TestCase"]
