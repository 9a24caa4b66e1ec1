# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checks applied to the files and report produced by one tool invocation.

Each check batches every offending item into a single
:class:`~dlcheck.errors.VerificationFailure` rather than stopping at the
first one, and attaches the captured tool output for diagnosis.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .checksum import digest
from .errors import VerificationFailure, VerificationStep
from .models import ResolvedArtifacts
from .report import KNOWN_SECTION_LABELS, parse_sections


def verify_outputs_exist(artifacts: ResolvedArtifacts, *, output: str) -> None:
    """Require every expected output to exist as a regular file.

    Args:
        artifacts: Expected outputs resolved for the working directory.
        output: Captured tool output attached to the failure.

    Raises:
        VerificationFailure: Listing every missing file, including outputs that are not files.
    """

    missing = [str(path) for path in artifacts.files if not path.is_file()]
    if missing:
        raise VerificationFailure(VerificationStep.EXISTENCE, details=missing, output=output)


def verify_contents_match(artifacts: ResolvedArtifacts, *, output: str) -> None:
    """Require outputs with a designated reference to be checksum-identical to it.

    Entries without a reference are never content-checked. Outputs that are not
    regular files are left to :func:`verify_outputs_exist`.

    Args:
        artifacts: Expected outputs resolved for the working directory.
        output: Captured tool output attached to the failure.

    Raises:
        VerificationFailure: Listing every mismatching or unreadable pair.
    """

    mismatches: list[str] = []
    for output_file, reference in artifacts.outputs.items():
        if reference is None or not output_file.is_file():
            continue
        try:
            reference_digest = digest(reference)
        except OSError as exc:
            mismatches.append(f"{reference} (unreadable: {exc.strerror or exc}) != {output_file}")
            continue
        try:
            output_digest = digest(output_file)
        except OSError as exc:
            mismatches.append(f"{reference} ({reference_digest}) != {output_file} (unreadable: {exc.strerror or exc})")
            continue
        if reference_digest != output_digest:
            mismatches.append(f"{reference} ({reference_digest}) != {output_file} ({output_digest})")
    if mismatches:
        raise VerificationFailure(VerificationStep.CONTENT, details=mismatches, output=output)


def verify_report(
    expected: Sequence[str] | None,
    *,
    output: str,
    known_labels: Iterable[str] = KNOWN_SECTION_LABELS,
) -> bool:
    """Require the parsed report sections to equal ``expected`` exactly.

    Args:
        expected: Rendered sections in order, or ``None`` to skip the check.
        output: Captured tool output to parse.
        known_labels: Labels that open a report section.

    Returns:
        bool: ``False`` when the check was skipped, ``True`` when it passed.

    Raises:
        VerificationFailure: Carrying the expected and actual sections.
    """

    if expected is None:
        return False
    actual = parse_sections(output, known_labels)
    if actual != list(expected):
        details = [
            "expected:",
            *(_indent(section) for section in expected),
            "actual:",
            *(_indent(section) for section in actual),
        ]
        raise VerificationFailure(VerificationStep.REPORT, details=details, output=output)
    return True


def _indent(section: str) -> str:
    return "\n".join(f"  {line}" for line in section.split("\n"))


__all__ = ["verify_contents_match", "verify_outputs_exist", "verify_report"]
