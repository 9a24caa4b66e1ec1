# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drive test cases: provision, invoke the download tool, capture, and verify."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .capture import OutputCapture
from .config import HarnessConfig
from .errors import HarnessError, ToolExecutionError, VerificationFailure, VerificationStep
from .logging import case_status, info
from .models import ResolvedArtifacts, RunResult, TestCase
from .process_utils import OutputListener, ProcessRunner, stream_command
from .verification import verify_contents_match, verify_outputs_exist, verify_report
from .workspace import Provisioner

ANDROID_HOME_PROPERTY: Final[str] = "ANDROID_HOME"
PACKAGES_PROPERTY: Final[str] = "PACKAGES_TO_COPY"
TARGET_DIR_PROPERTY: Final[str] = "TARGET_DIR"
MAVEN_REPOS_PROPERTY: Final[str] = "MAVEN_REPOS"
REPOSITORY_SEPARATOR: Final[str] = ";"


@dataclass(slots=True)
class ToolInvocation:
    """A single run of the download tool whose output listeners can be swapped."""

    task_name: str
    args: tuple[str, ...]
    cwd: Path
    properties: Mapping[str, str]
    _listeners: list[OutputListener] = field(default_factory=list, init=False, repr=False)

    def add_listener(self, listener: OutputListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: OutputListener) -> None:
        self._listeners.remove(listener)

    def emit(self, line: str) -> None:
        """Forward one line of tool output to every attached listener."""

        for listener in tuple(self._listeners):
            listener(line)


class TestCaseRunner:
    """Run test cases one at a time against a shared, pinned copy of the tool script."""

    __test__ = False

    def __init__(
        self,
        config: HarnessConfig,
        *,
        process_runner: ProcessRunner = stream_command,
        provisioner: Provisioner | None = None,
        capture: OutputCapture | None = None,
    ) -> None:
        """Initialise the runner.

        Args:
            config: Anchored harness configuration.
            process_runner: Capability used to spawn the tool process.
            provisioner: Optional provisioner override; derived from ``config`` by default.
            capture: Optional capture override; a private instance by default.
        """

        self.config = config
        self._process_runner = process_runner
        self.provisioner = provisioner or Provisioner(
            config.output_root,
            config.script_source,
            use_emoji=config.emoji,
        )
        self._capture = capture or OutputCapture()

    def build_invocation(self, case: TestCase, iteration: int, working_dir: Path) -> ToolInvocation:
        """Return the tool invocation for ``iteration`` of ``case``.

        Args:
            case: Test case being executed.
            iteration: One-based iteration number.
            working_dir: Working directory and download target of the case.

        Returns:
            ToolInvocation: Command line, working directory, and tool properties.
        """

        properties = {
            ANDROID_HOME_PROPERTY: str(self.config.android_home),
            PACKAGES_PROPERTY: case.packages,
            TARGET_DIR_PROPERTY: str(working_dir.resolve()),
            MAVEN_REPOS_PROPERTY: REPOSITORY_SEPARATOR.join(self.config.repository_uris()),
        }
        args = (
            *self.config.tool_command,
            str(self.provisioner.script_path),
            *(f"-P{key}={value}" for key, value in properties.items()),
        )
        return ToolInvocation(
            task_name=case.task_name(iteration),
            args=args,
            cwd=working_dir,
            properties=properties,
        )

    def run(self, case: TestCase) -> list[RunResult]:
        """Execute every iteration of ``case`` and verify each one.

        Iterations share the case's working directory. The first failing
        iteration stops the case.

        Args:
            case: Test case to execute.

        Returns:
            list[RunResult]: One passing result per iteration.

        Raises:
            ProvisioningError: If the working directory cannot be prepared.
            ToolExecutionError: If the tool cannot start or exits non-zero.
            VerificationFailure: If a check fails, attributed to the iteration.
        """

        working_dir = self.provisioner.provision_test_root(case.name, reset=self.config.fresh_environments)
        artifacts = ResolvedArtifacts.resolve(
            case.artifacts,
            target_dir=working_dir,
            repository_root=self.config.maven_repo,
        )
        results: list[RunResult] = []
        for iteration in range(1, case.iterations + 1):
            invocation = self.build_invocation(case, iteration, working_dir)
            info(invocation.task_name, use_emoji=self.config.emoji)
            output = self._execute(invocation)
            result = RunResult(
                task_name=invocation.task_name,
                iteration=iteration,
                output=output,
                output_files=artifacts.files,
            )
            try:
                self._verify(case, artifacts, result)
            except VerificationFailure as exc:
                raise exc.attribute(invocation.task_name, iteration) from exc
            results.append(result)
        return results

    def _execute(self, invocation: ToolInvocation) -> str:
        handle = self._capture.install(invocation)
        returncode: int | None = None
        reason: str | None = None
        try:
            returncode = self._process_runner(
                invocation.args,
                cwd=invocation.cwd,
                env=None,
                on_output=invocation.emit,
            )
        except (OSError, ValueError) as exc:
            reason = str(exc)
        finally:
            self._capture.uninstall(handle)
        output = self._capture.read(handle)
        if returncode != 0:
            raise ToolExecutionError(invocation.task_name, returncode=returncode, output=output, reason=reason)
        return output

    @staticmethod
    def _verify(case: TestCase, artifacts: ResolvedArtifacts, result: RunResult) -> None:
        verify_outputs_exist(artifacts, output=result.output)
        result.steps[VerificationStep.EXISTENCE] = True
        verify_contents_match(artifacts, output=result.output)
        result.steps[VerificationStep.CONTENT] = True
        if verify_report(case.expected_report, output=result.output):
            result.steps[VerificationStep.REPORT] = True


@dataclass(slots=True)
class CaseOutcome:
    """Final status of one test case within a suite run."""

    case: TestCase
    results: list[RunResult] = field(default_factory=list)
    error: HarnessError | None = None

    @property
    def passed(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class SuiteResult:
    """Outcomes of every test case in declaration order."""

    outcomes: list[CaseOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(outcome.passed for outcome in self.outcomes)

    @property
    def failures(self) -> Sequence[CaseOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]


def run_suite(cases: Iterable[TestCase], runner: TestCaseRunner) -> SuiteResult:
    """Run ``cases`` sequentially, recording each outcome instead of stopping at the first failure.

    Args:
        cases: Test cases in execution order.
        runner: Runner shared by every case.

    Returns:
        SuiteResult: Pass or fail status of every case.
    """

    suite = SuiteResult()
    use_emoji = runner.config.emoji
    for case in cases:
        try:
            results = runner.run(case)
        except HarnessError as exc:
            case_status(case.name, exc, use_emoji=use_emoji)
            suite.outcomes.append(CaseOutcome(case=case, error=exc))
            continue
        case_status(case.name, None, use_emoji=use_emoji)
        suite.outcomes.append(CaseOutcome(case=case, results=results))
    return suite


__all__ = [
    "ANDROID_HOME_PROPERTY",
    "CaseOutcome",
    "MAVEN_REPOS_PROPERTY",
    "PACKAGES_PROPERTY",
    "SuiteResult",
    "TARGET_DIR_PROPERTY",
    "TestCaseRunner",
    "ToolInvocation",
    "run_suite",
]
