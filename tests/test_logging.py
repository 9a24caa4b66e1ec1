# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console status lines."""

from __future__ import annotations

import pytest

from dlcheck.errors import ProvisioningError, ToolExecutionError, VerificationFailure, VerificationStep
from dlcheck.logging import case_status, describe_failure


def test_describe_verification_failure_names_iteration_and_step() -> None:
    error = VerificationFailure(VerificationStep.CONTENT, details=["a != b"], output="").attribute(
        "testDownloadAvailableTwice2",
        2,
    )

    assert describe_failure(error) == "content check failed in testDownloadAvailableTwice2"


def test_describe_tool_failures() -> None:
    exited = ToolExecutionError("testDownload", returncode=3, output="")
    missing = ToolExecutionError("testDownload", returncode=None, output="", reason="gradle not found")

    assert describe_failure(exited) == "download tool exited with status 3 in testDownload"
    assert describe_failure(missing) == "download tool did not start for testDownload"


def test_describe_other_errors_uses_first_line() -> None:
    assert describe_failure(ProvisioningError("Unable to create out\ndetails")) == "Unable to create out"


def test_case_status_lines(capsys: pytest.CaptureFixture[str]) -> None:
    case_status("testDownload", None, use_emoji=False)
    case_status(
        "testDownloadUnavailable",
        VerificationFailure(VerificationStep.REPORT, details=[], output="", task_name="testDownloadUnavailable"),
        use_emoji=False,
    )

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "testDownload passed",
        "testDownloadUnavailable failed: report check failed in testDownloadUnavailable",
    ]
