# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for existence, content, and report verification."""

from __future__ import annotations

from pathlib import Path

import pytest

from dlcheck.checksum import digest
from dlcheck.errors import VerificationFailure, VerificationStep
from dlcheck.models import ResolvedArtifacts
from dlcheck.verification import verify_contents_match, verify_outputs_exist, verify_report


def _layout(tmp_path: Path) -> tuple[Path, Path]:
    target = tmp_path / "case"
    repo = tmp_path / "repo"
    target.mkdir()
    repo.mkdir()
    for name in ("a.jar", "b.jar", "c.aar"):
        (repo / name).write_bytes(f"ref-{name}".encode())
        (target / name).write_bytes(f"ref-{name}".encode())
    return target, repo


def _resolve(target: Path, repo: Path, declared: dict[str, str | None]) -> ResolvedArtifacts:
    return ResolvedArtifacts.resolve(declared, target_dir=target, repository_root=repo)


def test_existence_passes_when_all_outputs_present(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)

    verify_outputs_exist(_resolve(target, repo, {"a.jar": "a.jar", "b.jar": None}), output="")


def test_existence_reports_exactly_the_missing_file(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)
    (target / "b.jar").unlink()

    with pytest.raises(VerificationFailure) as excinfo:
        verify_outputs_exist(
            _resolve(target, repo, {"a.jar": "a.jar", "b.jar": "b.jar", "c.aar": None}),
            output="tool said hi",
        )

    assert excinfo.value.kind is VerificationStep.EXISTENCE
    assert excinfo.value.details == (str(target / "b.jar"),)
    assert "tool said hi" in str(excinfo.value)


def test_existence_batches_every_missing_file(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)

    with pytest.raises(VerificationFailure) as excinfo:
        verify_outputs_exist(_resolve(target, repo, {"x.jar": None, "y.jar": None}), output="")

    assert excinfo.value.details == (str(target / "x.jar"), str(target / "y.jar"))


def test_stale_unrelated_files_do_not_satisfy_existence(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)
    (target / "stale-from-previous-run.jar").write_bytes(b"old")

    with pytest.raises(VerificationFailure) as excinfo:
        verify_outputs_exist(_resolve(target, repo, {"expected.jar": None}), output="")

    assert excinfo.value.details == (str(target / "expected.jar"),)


def test_content_passes_for_identical_files(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)

    verify_contents_match(_resolve(target, repo, {"a.jar": "a.jar", "b.jar": "b.jar"}), output="")


def test_content_reports_digest_mismatches(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)
    (target / "a.jar").write_bytes(b"tampered")
    (target / "b.jar").write_bytes(b"tampered too")

    with pytest.raises(VerificationFailure) as excinfo:
        verify_contents_match(
            _resolve(target, repo, {"a.jar": "a.jar", "b.jar": "b.jar", "c.aar": "c.aar"}),
            output="",
        )

    failure = excinfo.value
    assert failure.kind is VerificationStep.CONTENT
    assert failure.details == (
        f"{repo / 'a.jar'} ({digest(repo / 'a.jar')}) != {target / 'a.jar'} ({digest(target / 'a.jar')})",
        f"{repo / 'b.jar'} ({digest(repo / 'b.jar')}) != {target / 'b.jar'} ({digest(target / 'b.jar')})",
    )


def test_content_ignores_entries_without_reference(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)
    (target / "a.jar").write_bytes(b"anything at all")

    verify_contents_match(_resolve(target, repo, {"a.jar": None}), output="")


def test_content_leaves_missing_outputs_to_existence_check(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)

    verify_contents_match(_resolve(target, repo, {"absent.jar": "a.jar"}), output="")


def test_content_reports_unreadable_reference(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)

    with pytest.raises(VerificationFailure) as excinfo:
        verify_contents_match(_resolve(target, repo, {"a.jar": "no/such/reference.jar"}), output="")

    assert "unreadable" in excinfo.value.details[0]


def test_existence_rejects_directory_named_like_output(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)
    (target / "dir.jar").mkdir()

    with pytest.raises(VerificationFailure) as excinfo:
        verify_outputs_exist(_resolve(target, repo, {"a.jar": "a.jar", "dir.jar": None}), output="")

    assert excinfo.value.details == (str(target / "dir.jar"),)


def test_content_skips_directory_outputs(tmp_path: Path) -> None:
    target, repo = _layout(tmp_path)
    (target / "dir.jar").mkdir()

    verify_contents_match(_resolve(target, repo, {"dir.jar": "a.jar"}), output="")


def test_content_reports_unreadable_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target, repo = _layout(tmp_path)
    locked = target / "b.jar"

    def _digest(path: Path) -> str:
        if path == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return digest(path)

    monkeypatch.setattr("dlcheck.verification.digest", _digest)

    with pytest.raises(VerificationFailure) as excinfo:
        verify_contents_match(_resolve(target, repo, {"a.jar": "a.jar", "b.jar": "b.jar"}), output="")

    assert excinfo.value.kind is VerificationStep.CONTENT
    assert len(excinfo.value.details) == 1
    assert excinfo.value.details[0].endswith(f"{locked} (unreadable: Permission denied)")


def test_report_matches_expected_sections() -> None:
    output = "> Task :copy\nCopied artifacts:\na.jar\nb.jar\n\nBUILD SUCCESSFUL\n"

    assert verify_report(["Copied artifacts:\na.jar\nb.jar"], output=output)


def test_report_check_is_skipped_without_expectation() -> None:
    assert verify_report(None, output="Missing artifacts:\nx:y:1\n") is False


def test_report_order_matters() -> None:
    output = "Missing artifacts:\nx:y:1\n\nCopied artifacts:\na.jar\n"

    with pytest.raises(VerificationFailure) as excinfo:
        verify_report(["Copied artifacts:\na.jar", "Missing artifacts:\nx:y:1"], output=output)

    assert excinfo.value.kind is VerificationStep.REPORT
    assert excinfo.value.details[0] == "expected:"


def test_report_extra_section_fails() -> None:
    output = "Copied artifacts:\na.jar\n\nMissing artifacts:\nx:y:1\n"

    with pytest.raises(VerificationFailure):
        verify_report(["Copied artifacts:\na.jar"], output=output)


def test_attributed_failure_names_the_iteration() -> None:
    failure = VerificationFailure(VerificationStep.EXISTENCE, details=["/tmp/x.jar"], output="log")

    attributed = failure.attribute("testDownloadAvailableTwice2", 2)

    assert attributed.iteration == 2
    assert str(attributed).startswith("testDownloadAvailableTwice2 failed, missing expected file(s)\n/tmp/x.jar")
    assert "log" in str(attributed)
