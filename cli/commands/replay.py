"""
Replay command: run an interaction script against a program and report the result
"""

import importlib
import json
import os
import sys
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from simharness.core.program import ProgramDefinition
from simharness.core.state import Failed
from simharness.dom import decode
from simharness.dom.nodes import render_html
from simharness.logging_config import setup_logging
from simharness.program_test import (
    ProgramTest,
    create,
    create_with_base_url,
    create_with_json_string_flags,
)
from simharness.replay import load_script, replay, snapshot, state_fingerprint

console = Console()

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


class UsageError(Exception):
    pass


def load_target(target: str) -> Any:
    """
    Import "package.module:attribute".

    Raises:
        UsageError: If the target is malformed or cannot be imported
    """
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise UsageError(f"expected module:attribute, got {target!r}")
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise UsageError(f"cannot import {module_name!r}: {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise UsageError(f"{module_name!r} has no attribute {attr!r}") from e


def build_test(target: Any, base_url: Optional[str], flags: Optional[str]) -> ProgramTest:
    if isinstance(target, ProgramDefinition):
        if base_url is not None and flags is not None:
            raise UsageError("--base-url and --flags cannot be combined")
        if base_url is not None:
            return create_with_base_url(target, base_url)
        if flags is not None:
            return create_with_json_string_flags(target, decode.value, flags)
        return create(target)
    if base_url is not None or flags is not None:
        raise UsageError("--base-url and --flags only apply to a ProgramDefinition target")
    if callable(target):
        test = target()
        if isinstance(test, ProgramTest):
            return test
    raise UsageError("target must be a ProgramDefinition or a factory returning a ProgramTest")


def replay_command(
    program: str = typer.Option(
        ...,
        "--program",
        "-p",
        help="module:attribute naming a ProgramDefinition or a ProgramTest factory",
    ),
    script_path: str = typer.Option(..., "--script", "-s", help="Path to JSON interaction script"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Base URL for link resolution"),
    flags: Optional[str] = typer.Option(None, "--flags", help="JSON flags passed to init"),
    show_view: bool = typer.Option(False, "--show-view", help="Render the final view"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", envvar="SIMHARNESS_LOG_LEVEL", help="Harness log level"
    ),
):
    """
    Replay an interaction script and report the terminal state.

    Examples:
        simharness replay -p myapp.counter:program -s steps.json
        simharness replay -p myapp.links:program -s steps.json --base-url http://localhost:3000/
        simharness replay -p myapp.counter:make_test -s steps.json --json
    """
    setup_logging(level=log_level)
    try:
        test = build_test(load_target(program), base_url, flags)
        script = load_script(script_path)
    except FileNotFoundError:
        _error(json_output, "Script file not found", path=script_path)
        raise typer.Exit(EXIT_USAGE)
    except (UsageError, ValidationError, json.JSONDecodeError) as e:
        _error(json_output, str(e))
        raise typer.Exit(EXIT_USAGE)

    result = replay(test, script.steps)
    final = result.test
    summary = snapshot(final)
    digest = state_fingerprint(final)

    if json_output:
        output = dict(summary)
        output["applied"] = result.applied
        output["total_steps"] = len(script.steps)
        output["fingerprint"] = digest
        print(json.dumps(output, indent=2))
    else:
        _print_summary(final, summary, result.applied, len(script.steps), digest)
        if show_view and not isinstance(final.state, Failed):
            console.print("\n[bold]Final view:[/bold]")
            view = render_html(final.program.view(final.state.model))
            console.print(Syntax(view, "html", theme="monokai"))

    raise typer.Exit(EXIT_PASSED if result.passed else EXIT_FAILED)


def _print_summary(final: ProgramTest, summary: dict, applied: int, total: int, digest: str) -> None:
    result_failed = isinstance(final.state, Failed)
    if result_failed:
        console.print(f"[red]✗ Failed after {applied}/{total} steps[/red]")
    else:
        console.print(f"[green]✓ Replayed {applied}/{total} steps[/green]")

    table = Table(show_header=False, box=None)
    if result_failed:
        table.add_row("[bold]Origin[/bold]", escape(summary["origin"]))
        table.add_row("[bold]Reason[/bold]", f"[red]{escape(summary['reason'])}[/red]")
    else:
        table.add_row("[bold]Model[/bold]", escape(json.dumps(summary["model"])))
        table.add_row("[bold]Last effect[/bold]", escape(json.dumps(summary["last_effect"])))
        table.add_row("[bold]Location[/bold]", str(summary["location"]))
        table.add_row("[bold]Page change[/bold]", str(summary["page_change"]))
    table.add_row("[bold]Fingerprint[/bold]", f"[yellow]{digest}[/yellow]")
    console.print(table)


def _error(json_output: bool, message: str, **fields: Any) -> None:
    if json_output:
        print(json.dumps({"error": message, **fields}))
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")
