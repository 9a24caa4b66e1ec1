# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Acceptance cases for the artifact download script.

Reference paths are relative to the local test maven repository and expected
outputs are relative to each case's working directory.
"""

from __future__ import annotations

from typing import Final

from .models import TestCase
from .report import COPIED_ARTIFACTS_HEADER, MISSING_ARTIFACTS_HEADER, MODIFIED_ARTIFACTS_HEADER, ReportSection


def _section(label: str, *entries: str) -> str:
    return ReportSection(label=label, entries=entries).render()


_ARCH_CORE_COMMON: Final[dict[str, str | None]] = {
    "android.arch.core.common-1.0.0.jar": "android/arch/core/common/1.0.0/common-1.0.0.jar",
    "com.android.support.support-annotations-26.1.0.jar": (
        "com/android/support/support-annotations/26.1.0/support-annotations-26.1.0.jar"
    ),
}

_ARCH_CORE_COMMON_REPORT: Final[tuple[str, ...]] = (
    _section(
        COPIED_ARTIFACTS_HEADER,
        "android.arch.core.common-1.0.0.jar",
        "com.android.support.support-annotations-26.1.0.jar",
    ),
)

DEFAULT_SUITE: Final[tuple[TestCase, ...]] = (
    TestCase(
        name="testDownloadAvailable",
        description="Downloads a single artifact and its dependencies from maven.",
        packages="android.arch.core:common:1.0.0",
        artifacts=_ARCH_CORE_COMMON,
        expected_report=_ARCH_CORE_COMMON_REPORT,
    ),
    TestCase(
        name="testDownloadAvailableTwice",
        description="Downloads a single artifact and its dependencies from maven twice.",
        packages="android.arch.core:common:1.0.0",
        artifacts=_ARCH_CORE_COMMON,
        expected_report=_ARCH_CORE_COMMON_REPORT,
        iterations=2,
    ),
    TestCase(
        name="testDownloadAvailableWithSameName",
        description="Downloads artifacts with the same artifact name and their dependencies from a maven repo.",
        packages="android.arch.core:common:1.0.0;android.arch.lifecycle:common:1.0.0;",
        artifacts={
            "android.arch.core.common-1.0.0.jar": "android/arch/core/common/1.0.0/common-1.0.0.jar",
            "android.arch.lifecycle.common-1.0.0.jar": "android/arch/lifecycle/common/1.0.0/common-1.0.0.jar",
            "com.android.support.support-annotations-26.1.0.jar": (
                "com/android/support/support-annotations/26.1.0/support-annotations-26.1.0.jar"
            ),
        },
        expected_report=(
            _section(
                COPIED_ARTIFACTS_HEADER,
                "android.arch.core.common-1.0.0.jar",
                "android.arch.lifecycle.common-1.0.0.jar",
                "com.android.support.support-annotations-26.1.0.jar",
            ),
        ),
    ),
    TestCase(
        name="testDownloadUnavailable",
        description="Attempts to download a non-existent artifact.",
        packages="apackage.thatdoes.notexist:9.9.9",
        expected_report=(_section(MISSING_ARTIFACTS_HEADER, "apackage.thatdoes.notexist:9.9.9"),),
    ),
    TestCase(
        name="testDownloadConflictingVersions",
        description="Downloads conflicting versions of an artifact with the download script resolving the conflict.",
        packages="com.android.support:appcompat-v7:23.0.0;com.android.support:support-v4:24.0.0;",
        artifacts={
            "com.android.support.animated-vector-drawable-24.0.0.aar": (
                "com/android/support/animated-vector-drawable/24.0.0/animated-vector-drawable-24.0.0.aar"
            ),
            "com.android.support.appcompat-v7-24.0.0.aar": (
                "com/android/support/appcompat-v7/24.0.0/appcompat-v7-24.0.0.aar"
            ),
            "com.android.support.support-annotations-24.0.0.jar": (
                "com/android/support/support-annotations/24.0.0/support-annotations-24.0.0.jar"
            ),
            "com.android.support.support-v4-24.0.0.aar": "com/android/support/support-v4/24.0.0/support-v4-24.0.0.aar",
            "com.android.support.support-vector-drawable-24.0.0.aar": (
                "com/android/support/support-vector-drawable/24.0.0/support-vector-drawable-24.0.0.aar"
            ),
        },
        expected_report=(
            _section(
                COPIED_ARTIFACTS_HEADER,
                "com.android.support.animated-vector-drawable-24.0.0.aar",
                "com.android.support.appcompat-v7-24.0.0.aar",
                "com.android.support.support-annotations-24.0.0.jar",
                "com.android.support.support-v4-24.0.0.aar",
                "com.android.support.support-vector-drawable-24.0.0.aar",
            ),
            _section(
                MODIFIED_ARTIFACTS_HEADER,
                "com.android.support:appcompat-v7:23.0.0 --> com.android.support:appcompat-v7:24.0.0",
            ),
        ),
    ),
    TestCase(
        name="testDownloadSrcAar",
        description="Download a srcaar artifact and validate it's found and renamed to an aar in the target directory.",
        packages="com.google.firebase:firebase-app-unity:4.3.0;",
        artifacts={
            "com.google.firebase.firebase-app-unity-4.3.0.aar": (
                "com/google/firebase/firebase-app-unity/4.3.0/firebase-app-unity-4.3.0.srcaar"
            ),
        },
        expected_report=(_section(COPIED_ARTIFACTS_HEADER, "com.google.firebase.firebase-app-unity-4.3.0.aar"),),
    ),
    TestCase(
        name="testFirebaseUnityNotVersionLocked",
        description=(
            "Ensure firebase-.*-unity packages are not locked to the same version as "
            "Google Play services or Firebase packages."
        ),
        packages="com.google.firebase:firebase-app-unity:4.3.0;com.google.android.gms:play-services-basement:9.8.0;",
        artifacts={
            "com.google.firebase.firebase-app-unity-4.3.0.aar": (
                "com/google/firebase/firebase-app-unity/4.3.0/firebase-app-unity-4.3.0.srcaar"
            ),
            # Fetched from Google's maven repository, so there is no local reference.
            "com.google.android.gms.play-services-basement-9.8.0.aar": None,
        },
        expected_report=(
            _section(
                COPIED_ARTIFACTS_HEADER,
                "com.android.support.support-annotations-24.0.0.jar",
                "com.android.support.support-v4-24.0.0.aar",
                "com.google.android.gms.play-services-basement-9.8.0.aar",
                "com.google.firebase.firebase-app-unity-4.3.0.aar",
            ),
        ),
    ),
    TestCase(
        name="testDownloadUsingVersionWildcard",
        description="Download an artifact using a version wildcard.",
        packages="com.android.support:appcompat-v7:23.0.+",
        artifacts={
            "com.android.support.appcompat-v7-23.0.1.aar": (
                "com/android/support/appcompat-v7/23.0.1/appcompat-v7-23.0.1.aar"
            ),
            "com.android.support.support-annotations-23.0.1.jar": (
                "com/android/support/support-annotations/23.0.1/support-annotations-23.0.1.jar"
            ),
            "com.android.support.support-v4-23.0.1.aar": "com/android/support/support-v4/23.0.1/support-v4-23.0.1.aar",
        },
        expected_report=(
            _section(
                COPIED_ARTIFACTS_HEADER,
                "com.android.support.appcompat-v7-23.0.1.aar",
                "com.android.support.support-annotations-23.0.1.jar",
                "com.android.support.support-v4-23.0.1.aar",
            ),
        ),
    ),
    TestCase(
        name="testDownloadUsingVersionRange",
        description="Download an artifact using a version range.",
        packages="com.android.support:support-annotations:[23,26.1.0]",
        artifacts={
            "com.android.support.support-annotations-26.1.0.jar": (
                "com/android/support/support-annotations/26.1.0/support-annotations-26.1.0.jar"
            ),
        },
        expected_report=(_section(COPIED_ARTIFACTS_HEADER, "com.android.support.support-annotations-26.1.0.jar"),),
    ),
    TestCase(
        name="testDownloadSnapshotVersion",
        description="Download a snapshot version of an artifact.",
        packages="com.android.support:support-v4:23.0.1;com.android.support:support-annotations:27.0.2-SNAPSHOT",
        artifacts={
            "com.android.support.support-annotations-27.0.2-SNAPSHOT.jar": (
                "com/android/support/support-annotations/27.0.2-SNAPSHOT/support-annotations-27.0.2-SNAPSHOT.jar"
            ),
        },
        expected_report=(
            _section(COPIED_ARTIFACTS_HEADER, "com.android.support.support-annotations-27.0.2-SNAPSHOT.jar"),
            _section(MISSING_ARTIFACTS_HEADER, "com.android.support:support-v4:27.0.2-SNAPSHOT"),
            _section(
                MODIFIED_ARTIFACTS_HEADER,
                "com.android.support:support-v4:23.0.1 --> com.android.support:support-v4:27.0.2-SNAPSHOT",
            ),
        ),
    ),
)


__all__ = ["DEFAULT_SUITE"]
