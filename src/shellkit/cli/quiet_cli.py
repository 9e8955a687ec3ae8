"""
run-quiet-on-success: show a command's output only when it fails.
"""

from typing import List

import typer

from shellkit.cli.common import PASSTHROUGH_SETTINGS, UsageExitCommand, err_console, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.quiet import run_quietly

app = typer.Typer(help="Print output only on failure", add_completion=False)


def run_quiet_on_success(
    command: List[str] = typer.Argument(..., help="Command and its arguments"),
):
    """
    Run COMMAND, printing its output only if it exits non-zero.

    Exits with COMMAND's exit status.
    """
    try:
        result = run_quietly(command)
    except ShellkitError as e:
        fail(e)

    if result.ok:
        return
    typer.echo(result.output, nl=False)
    err_console.print(f"error: {result.error_line()}", style="bold red", markup=False, highlight=False)
    raise typer.Exit(code=result.exit_code)


app.command(cls=UsageExitCommand, context_settings=PASSTHROUGH_SETTINGS)(run_quiet_on_success)
