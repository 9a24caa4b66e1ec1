# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised while provisioning, running, and verifying test cases."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class HarnessError(RuntimeError):
    """Base class for failures that terminate a single test case."""


class ConfigError(HarnessError):
    """Raised when harness configuration input is invalid."""


class ProvisioningError(HarnessError):
    """Raised when the working directory or the shared tool script cannot be prepared."""


class CaptureStateError(HarnessError):
    """Raised when output capture is installed, read, or removed out of order."""


class ToolExecutionError(HarnessError):
    """Raised when the download tool fails to start or exits with a non-zero status."""

    def __init__(
        self,
        task_name: str,
        *,
        returncode: int | None,
        output: str,
        reason: str | None = None,
    ) -> None:
        """Initialise the error with the captured tool output.

        Args:
            task_name: Invocation name of the failed iteration.
            returncode: Exit status of the tool, ``None`` when it never started.
            output: Text captured from the tool's output and error streams.
            reason: Optional description of why the process could not be started.
        """

        if returncode is None:
            headline = f"{task_name} failed, unable to start the download tool: {reason or 'unknown error'}"
        else:
            headline = f"{task_name} failed, download tool exited with status {returncode}"
        super().__init__(f"{headline}\n\n{output}")
        self.task_name = task_name
        self.returncode = returncode
        self.output = output
        self.reason = reason


class VerificationStep(str, Enum):
    """Enumerate the checks applied to every iteration of a test case."""

    EXISTENCE = "existence"
    CONTENT = "content"
    REPORT = "report"


_HEADLINES: dict[VerificationStep, str] = {
    VerificationStep.EXISTENCE: "missing expected file(s)",
    VerificationStep.CONTENT: "unexpected output file(s)",
    VerificationStep.REPORT: "unexpected report section(s)",
}


class VerificationFailure(HarnessError):
    """Raised when one of the verification steps rejects an iteration.

    Offending items are batched, so ``details`` lists every missing file,
    every checksum mismatch, or the expected and actual report sections.
    """

    def __init__(
        self,
        kind: VerificationStep,
        *,
        details: Sequence[str],
        output: str,
        task_name: str = "",
        iteration: int = 1,
    ) -> None:
        """Initialise the failure.

        Args:
            kind: Verification step that failed.
            details: Lines describing each offending item.
            output: Captured tool output attached for diagnosis.
            task_name: Invocation name of the failing iteration.
            iteration: One-based iteration number of the failing run.
        """

        self.kind = kind
        self.details = tuple(details)
        self.output = output
        self.task_name = task_name
        self.iteration = iteration
        super().__init__(self._render())

    def attribute(self, task_name: str, iteration: int) -> VerificationFailure:
        """Return a copy of the failure attributed to a specific iteration.

        Args:
            task_name: Invocation name of the failing iteration.
            iteration: One-based iteration number.

        Returns:
            VerificationFailure: Failure carrying the task identity in its message.
        """

        return VerificationFailure(
            self.kind,
            details=self.details,
            output=self.output,
            task_name=task_name,
            iteration=iteration,
        )

    def _render(self) -> str:
        name = self.task_name or "verification"
        details = "\n".join(self.details)
        return f"{name} failed, {_HEADLINES[self.kind]}\n{details}\n\n{self.output}\n"


__all__ = [
    "CaptureStateError",
    "ConfigError",
    "HarnessError",
    "ProvisioningError",
    "ToolExecutionError",
    "VerificationFailure",
    "VerificationStep",
]
