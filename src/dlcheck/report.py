# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extract the labelled sections emitted by the download script.

The download script finishes with a summary made of blocks such as::

    Copied artifacts:
    android.arch.core.common-1.0.0.jar
    com.android.support.support-annotations-26.1.0.jar

    Missing artifacts:
    apackage.thatdoes.notexist:9.9.9

Only blocks opened by a known label are kept; Gradle progress lines and other
chatter outside a block are ignored. The extractor is intentionally lossy and
is not a general log parser.
"""

from __future__ import annotations

from collections.abc import Iterable, Set
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

COPIED_ARTIFACTS_HEADER: Final[str] = "Copied artifacts:"
MISSING_ARTIFACTS_HEADER: Final[str] = "Missing artifacts:"
MODIFIED_ARTIFACTS_HEADER: Final[str] = "Modified artifacts:"

KNOWN_SECTION_LABELS: Final[frozenset[str]] = frozenset(
    {COPIED_ARTIFACTS_HEADER, MISSING_ARTIFACTS_HEADER, MODIFIED_ARTIFACTS_HEADER},
)


@dataclass(frozen=True, slots=True)
class ReportSection:
    """A labelled block of report entries in the order the tool emitted them."""

    label: str
    entries: tuple[str, ...] = ()

    def render(self) -> str:
        """Return the section as ``"Label:\\nentry1\\nentry2"``."""

        return "\n".join((self.label, *self.entries))

    @classmethod
    def from_text(cls, text: str) -> ReportSection:
        """Build a section from its rendered form.

        Args:
            text: Rendered section whose first line is the label.

        Returns:
            ReportSection: Section split into label and entries.
        """

        label, *entries = text.split("\n")
        return cls(label=label.strip(), entries=tuple(entries))


class _ParserState(Enum):
    IDLE = "idle"
    IN_SECTION = "in_section"


@dataclass(slots=True)
class _SectionMachine:
    """Two-state machine that accumulates section lines and emits closed sections."""

    labels: Set[str]
    state: _ParserState = _ParserState.IDLE
    current: list[str] = field(default_factory=list)
    emitted: list[str] = field(default_factory=list)

    def feed(self, line: str) -> None:
        if line.strip() in self.labels:
            self._close()
            self.current = [line]
            self.state = _ParserState.IN_SECTION
        elif line == "":
            self._close()
        elif self.state is _ParserState.IN_SECTION:
            self.current.append(line)

    def finish(self) -> list[str]:
        self._close()
        return self.emitted

    def _close(self) -> None:
        # Closing an idle machine is a no-op, so consecutive blank lines collapse.
        if self.state is _ParserState.IDLE:
            return
        self.emitted.append("\n".join(self.current))
        self.current = []
        self.state = _ParserState.IDLE


def parse_sections(text: str, known_labels: Iterable[str] = KNOWN_SECTION_LABELS) -> list[str]:
    """Split tool output into the ordered list of rendered report sections.

    A line whose stripped content equals a known label opens a new section and
    becomes its first line. An empty line closes the open section. Any other
    line joins the open section or is dropped when no section is open. A
    section still open at the end of ``text`` is flushed last. Repeated labels
    yield separate sections.

    Args:
        text: Combined output and error text captured from the tool.
        known_labels: Labels that open a section.

    Returns:
        list[str]: Sections joined with ``"\\n"``, in encounter order.
    """

    machine = _SectionMachine(labels=frozenset(known_labels))
    for line in text.splitlines():
        machine.feed(line)
    return machine.finish()


def parse_report(
    text: str,
    known_labels: Iterable[str] = KNOWN_SECTION_LABELS,
) -> list[ReportSection]:
    """Return :func:`parse_sections` output as structured :class:`ReportSection` values."""

    return [ReportSection.from_text(section) for section in parse_sections(text, known_labels)]


__all__ = [
    "COPIED_ARTIFACTS_HEADER",
    "KNOWN_SECTION_LABELS",
    "MISSING_ARTIFACTS_HEADER",
    "MODIFIED_ARTIFACTS_HEADER",
    "ReportSection",
    "parse_report",
    "parse_sections",
]
