# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Provision the shared output root and per-test-case working directories."""

from __future__ import annotations

import shutil
from pathlib import Path

from .errors import ProvisioningError
from .logging import info


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and any missing ancestors; existing directories are left alone.

    Args:
        path: Directory to create.

    Returns:
        Path: The same ``path`` for call chaining.

    Raises:
        ProvisioningError: If the directory cannot be created.
    """

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ProvisioningError(f"Unable to create directory {path}: {exc}") from exc
    return path


def _clear_directory(path: Path) -> None:
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


class Provisioner:
    """Lay out the harness output root.

    All test cases run against one copy of the tool script placed directly
    under ``output_root`` so every case exercises the identical, pinned
    version. The copy happens lazily before the first working directory is
    created. Working directories are ``output_root / <test case name>`` and are
    never removed automatically so they remain available for inspection.
    """

    def __init__(self, output_root: Path, script_source: Path, *, use_emoji: bool = True) -> None:
        """Initialise the provisioner.

        Args:
            output_root: Shared directory holding the script copy and test roots.
            script_source: Tool script copied into ``output_root``.
            use_emoji: Flag controlling emoji in log output.
        """

        self.output_root = output_root
        self.script_source = script_source
        self._use_emoji = use_emoji
        self._script_copy: Path | None = None

    @property
    def script_path(self) -> Path:
        """Return the location of the shared script copy."""

        return self.output_root / self.script_source.name

    def ensure_script(self) -> Path:
        """Copy the tool script into the output root once per provisioner.

        Returns:
            Path: Location of the shared script copy.

        Raises:
            ProvisioningError: If the script is missing or cannot be copied.
        """

        if self._script_copy is not None:
            return self._script_copy
        ensure_directory(self.output_root)
        if not self.script_source.is_file():
            raise ProvisioningError(f"Tool script not found: {self.script_source}")
        try:
            shutil.copy2(self.script_source, self.script_path)
        except OSError as exc:
            raise ProvisioningError(
                f"Unable to copy {self.script_source} into {self.output_root}: {exc}",
            ) from exc
        info(f"Copied {self.script_source.name} into {self.output_root}", use_emoji=self._use_emoji)
        self._script_copy = self.script_path
        return self._script_copy

    def test_root(self, name: str) -> Path:
        """Return the working directory path for test case ``name`` without creating it."""

        return self.output_root / name

    def provision_test_root(self, name: str, *, reset: bool = False) -> Path:
        """Return the working directory for ``name``, creating it when needed.

        Args:
            name: Test case name.
            reset: When ``True`` remove any leftovers from previous harness runs.

        Returns:
            Path: Working directory of the test case.

        Raises:
            ProvisioningError: If the script copy or the directory setup fails.
        """

        self.ensure_script()
        working_dir = ensure_directory(self.test_root(name))
        if reset:
            try:
                _clear_directory(working_dir)
            except OSError as exc:
                raise ProvisioningError(f"Unable to reset {working_dir}: {exc}") from exc
        return working_dir


__all__ = ["Provisioner", "ensure_directory"]
