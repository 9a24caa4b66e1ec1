# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point running the acceptance suite."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from .cases import DEFAULT_SUITE
from .config import HarnessConfig, load_config
from .console import detect_tty, get_console_manager
from .errors import ConfigError
from .logging import fail, ok, section
from .runner import SuiteResult, TestCaseRunner, run_suite

CONFIG_ERROR_EXIT_CODE = 2

CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", help="Configuration file; defaults to dlcheck.toml or [tool.dlcheck]."),
]
OUTPUT_ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--output-root", help="Directory receiving the script copy and test directories."),
]
FRESH_OPTION = Annotated[
    bool,
    typer.Option("--fresh", help="Clear each test directory before its first iteration."),
]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")]

app = typer.Typer(
    name="dlcheck",
    help="Acceptance tests for the artifact download script.",
    no_args_is_help=True,
    add_completion=False,
)


def _load(config_path: Path | None, output_root: Path | None, fresh: bool, emoji: bool) -> HarnessConfig:
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc
    updates: dict[str, object] = {"emoji": emoji}
    if output_root is not None:
        updates["output_root"] = output_root.resolve()
    if fresh:
        updates["fresh_environments"] = True
    return config.model_copy(update=updates)


def _render_summary(result: SuiteResult, *, emoji: bool) -> None:
    use_color = detect_tty()
    console = get_console_manager().get(color=use_color, emoji=emoji)
    table = Table(title="Download artifacts acceptance suite")
    table.add_column("Test case")
    table.add_column("Iterations", justify="right")
    table.add_column("Status")
    for outcome in result.outcomes:
        status = "[green]passed[/green]" if outcome.passed else "[red]failed[/red]"
        table.add_row(outcome.case.name, str(outcome.case.iterations), status)
    console.print(table)
    for outcome in result.failures:
        section(outcome.case.name, use_color=use_color)
        console.print(str(outcome.error), markup=False, highlight=False)


@app.command("run")
def run_command(
    config_path: CONFIG_OPTION = None,
    output_root: OUTPUT_ROOT_OPTION = None,
    fresh: FRESH_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Run every acceptance case and report each outcome."""

    config = _load(config_path, output_root, fresh, emoji)
    result = run_suite(DEFAULT_SUITE, TestCaseRunner(config))
    _render_summary(result, emoji=emoji)
    if not result.passed:
        fail(f"{len(result.failures)} of {len(result.outcomes)} test cases failed", use_emoji=emoji)
        raise typer.Exit(code=1)
    ok(f"All {len(result.outcomes)} test cases passed", use_emoji=emoji)


@app.command("list")
def list_command(emoji: EMOJI_OPTION = True) -> None:
    """List the declared acceptance cases."""

    console = get_console_manager().get(color=detect_tty(), emoji=emoji)
    for case in DEFAULT_SUITE:
        suffix = f" (x{case.iterations})" if case.iterations > 1 else ""
        console.print(f"{case.name}{suffix}: {case.description}", markup=False, highlight=False)


__all__ = ["app"]
