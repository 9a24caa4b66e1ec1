# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution of the tool under test."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# the download tool, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Protocol

OutputListener = Callable[[str], None]


class ProcessRunner(Protocol):
    """Run an external process and stream its merged output to a listener."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None,
        on_output: OutputListener,
    ) -> int:
        """Run ``args`` to completion and return the exit status."""


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def stream_command(
    args: Sequence[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    on_output: OutputListener,
) -> int:
    """Execute *args* and forward every output line to ``on_output``.

    Standard error is merged into standard output so lines reach the listener
    in emission order with their terminators intact. The call blocks until the
    process exits; no timeout is applied.

    Args:
        args: Command and arguments; the executable is resolved on ``PATH``.
        cwd: Working directory of the child process.
        env: Optional environment replacing the inherited one.
        on_output: Callback receiving each line of output.

    Returns:
        int: Exit status of the process.

    Raises:
        FileNotFoundError: If the executable cannot be located.
        OSError: If the process cannot be spawned or its output cannot be read.
    """

    normalized = _normalize_args(args)
    # Bandit: arguments are passed as a list without shell expansion.
    with subprocess.Popen(  # nosec B603
        normalized,
        cwd=str(cwd),
        env=dict(env) if env is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
        bufsize=1,
    ) as process:
        if process.stdout is None:
            process.kill()
            raise OSError(f"output pipe of {normalized[0]} is unavailable")
        for line in process.stdout:
            on_output(line)
        return process.wait()


__all__ = ["OutputListener", "ProcessRunner", "stream_command"]
