# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console status lines for harness progress and test case outcomes."""

from __future__ import annotations

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager
from .errors import HarnessError, ToolExecutionError, VerificationFailure


def _emoji(symbol: str, enable: bool) -> str:
    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Print ``msg`` on the shared console, styled only when colour is active.

    Args:
        msg: Message text to print to the console.
        style: Rich style applied when colour output is active.
        use_emoji: Whether the console renders emoji glyphs.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating the failure details of one test case."""

    console = get_console_manager().get(color=use_color, emoji=True)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a progress message such as the task name about to run."""

    _print_line(f"{_emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _print_line(f"{_emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _print_line(f"{_emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def describe_failure(error: HarnessError) -> str:
    """Return a one-line summary naming the failing iteration and step.

    Args:
        error: Error that terminated a test case.

    Returns:
        str: Summary such as ``"content check failed in testDownload2"``.
    """

    if isinstance(error, VerificationFailure):
        return f"{error.kind.value} check failed in {error.task_name or 'verification'}"
    if isinstance(error, ToolExecutionError):
        if error.returncode is None:
            return f"download tool did not start for {error.task_name}"
        return f"download tool exited with status {error.returncode} in {error.task_name}"
    return str(error).splitlines()[0] if str(error) else type(error).__name__


def case_status(name: str, error: HarnessError | None, *, use_emoji: bool) -> None:
    """Print the pass or fail line of one test case."""

    if error is None:
        ok(f"{name} passed", use_emoji=use_emoji)
    else:
        fail(f"{name} failed: {describe_failure(error)}", use_emoji=use_emoji)


__all__ = ["case_status", "describe_failure", "fail", "info", "ok", "section"]
