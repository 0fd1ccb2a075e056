#!/usr/bin/env python3
"""
simharness CLI - Deterministic Program Simulation

Main entrypoint for the simharness command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import replay

# Initialize Typer app
app = typer.Typer(
    name="simharness",
    help="Deterministic program simulation harness CLI",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command("replay")(replay.replay_command)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from simharness import __version__ as harness_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]simharness CLI[/bold]", f"v{__version__}")
    table.add_row("Harness", f"v{harness_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
