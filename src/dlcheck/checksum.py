# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checksum utilities used to compare downloaded artifacts with their sources."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Final

_CHUNK_SIZE: Final[int] = 1 << 16


def digest(path: Path) -> str:
    """Return the SHA-256 hex digest of the full byte content of ``path``.

    Args:
        path: File to hash.

    Returns:
        str: Lowercase hexadecimal digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """

    hasher = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def contents_match(first: Path, second: Path) -> bool:
    """Return ``True`` when ``first`` and ``second`` hold byte-identical content.

    Both files must exist; missing files surface as :class:`OSError`.
    """

    return digest(first) == digest(second)


__all__ = ["contents_match", "digest"]
