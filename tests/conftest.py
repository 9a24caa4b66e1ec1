# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from dlcheck.config import HarnessConfig

FAKE_TOOL = Path(__file__).resolve().parent / "fixtures" / "fake_download_artifacts.py"

REPOSITORY_FILES: dict[str, bytes] = {
    "android/arch/core/common/1.0.0/common-1.0.0.jar": b"arch-core-common-1.0.0",
    "com/android/support/support-annotations/26.1.0/support-annotations-26.1.0.jar": b"annotations-26.1.0",
    "com/android/support/animated-vector-drawable/24.0.0/animated-vector-drawable-24.0.0.aar": b"avd-24.0.0",
    "com/android/support/appcompat-v7/24.0.0/appcompat-v7-24.0.0.aar": b"appcompat-24.0.0",
    "com/android/support/support-annotations/24.0.0/support-annotations-24.0.0.jar": b"annotations-24.0.0",
    "com/android/support/support-v4/24.0.0/support-v4-24.0.0.aar": b"support-v4-24.0.0",
    "com/android/support/support-vector-drawable/24.0.0/support-vector-drawable-24.0.0.aar": b"svd-24.0.0",
}

RESOLUTIONS: dict[str, dict[str, list]] = {
    "android.arch.core:common:1.0.0": {
        "copied": [
            ["android/arch/core/common/1.0.0/common-1.0.0.jar", "android.arch.core.common-1.0.0.jar"],
            [
                "com/android/support/support-annotations/26.1.0/support-annotations-26.1.0.jar",
                "com.android.support.support-annotations-26.1.0.jar",
            ],
        ],
    },
    "com.android.support:appcompat-v7:23.0.0;com.android.support:support-v4:24.0.0;": {
        "copied": [
            [
                "com/android/support/animated-vector-drawable/24.0.0/animated-vector-drawable-24.0.0.aar",
                "com.android.support.animated-vector-drawable-24.0.0.aar",
            ],
            [
                "com/android/support/appcompat-v7/24.0.0/appcompat-v7-24.0.0.aar",
                "com.android.support.appcompat-v7-24.0.0.aar",
            ],
            [
                "com/android/support/support-annotations/24.0.0/support-annotations-24.0.0.jar",
                "com.android.support.support-annotations-24.0.0.jar",
            ],
            [
                "com/android/support/support-v4/24.0.0/support-v4-24.0.0.aar",
                "com.android.support.support-v4-24.0.0.aar",
            ],
            [
                "com/android/support/support-vector-drawable/24.0.0/support-vector-drawable-24.0.0.aar",
                "com.android.support.support-vector-drawable-24.0.0.aar",
            ],
        ],
        "modified": ["com.android.support:appcompat-v7:23.0.0 --> com.android.support:appcompat-v7:24.0.0"],
    },
    "broken:tool:1.0.0": {"exit": 3},
    # Reports a copy but writes the wrong file so content checks fail.
    "corrupt:copy:1.0.0": {
        "copied": [
            [
                "com/android/support/support-v4/24.0.0/support-v4-24.0.0.aar",
                "android.arch.core.common-1.0.0.jar",
            ],
        ],
    },
}


@pytest.fixture
def maven_repo(tmp_path: Path) -> Path:
    """Return a local maven repository populated with fake artifacts."""
    root = tmp_path / "m2repository"
    for relative, content in REPOSITORY_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    (root / "resolutions.json").write_text(json.dumps(RESOLUTIONS), encoding="utf-8")
    return root


@pytest.fixture
def harness_config(tmp_path: Path, maven_repo: Path) -> HarnessConfig:
    """Return a configuration that runs the fake download tool with this interpreter."""
    return HarnessConfig(
        output_root=tmp_path / "output",
        script_source=FAKE_TOOL,
        maven_repo=maven_repo,
        android_home=tmp_path,
        tool_command=(sys.executable,),
        emoji=False,
    )
