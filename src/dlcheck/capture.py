# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capture the output and error streams of a tool invocation into a buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .errors import CaptureStateError
from .process_utils import OutputListener


class OutputSource(Protocol):
    """Object whose output and error streams accept line listeners."""

    def add_listener(self, listener: OutputListener) -> None:
        """Attach ``listener`` to the output and error streams."""

    def remove_listener(self, listener: OutputListener) -> None:
        """Detach ``listener`` from the output and error streams."""


@dataclass(slots=True, eq=False)
class CaptureHandle:
    """Buffer owned by exactly one install/uninstall cycle."""

    target: OutputSource
    lines: list[str] = field(default_factory=list)
    installed: bool = True

    def __call__(self, line: str) -> None:
        self.lines.append(line)


class OutputCapture:
    """Attach a buffer to one target at a time.

    The capture is reusable across sequential runs; each :meth:`install`
    starts from an empty buffer and returns the handle subsequent calls take.
    """

    def __init__(self) -> None:
        self._active: CaptureHandle | None = None

    @property
    def active(self) -> CaptureHandle | None:
        """Return the handle currently attached to a target, if any."""

        return self._active

    def install(self, target: OutputSource) -> CaptureHandle:
        """Attach a fresh buffer to ``target``'s output and error streams.

        Args:
            target: Invocation whose streams should be captured.

        Returns:
            CaptureHandle: Handle to pass to :meth:`uninstall` and :meth:`read`.

        Raises:
            CaptureStateError: If another handle is still installed.
        """

        if self._active is not None:
            raise CaptureStateError("output capture is already installed on another target")
        handle = CaptureHandle(target=target)
        target.add_listener(handle)
        self._active = handle
        return handle

    def uninstall(self, handle: CaptureHandle) -> None:
        """Detach ``handle`` from its target, leaving the buffer readable.

        Raises:
            CaptureStateError: If ``handle`` is not the installed handle.
        """

        if handle is not self._active:
            raise CaptureStateError("output capture handle is not installed")
        handle.target.remove_listener(handle)
        handle.installed = False
        self._active = None

    def read(self, handle: CaptureHandle) -> str:
        """Return the captured text with the original line terminators.

        Raises:
            CaptureStateError: If ``handle`` is still installed.
        """

        if handle.installed:
            raise CaptureStateError("uninstall the output capture before reading it")
        return "".join(handle.lines)


__all__ = ["CaptureHandle", "OutputCapture", "OutputSource"]
