"""
tmux-run: open a command in a new tmux window.
"""

from typing import List, Optional

import typer

from shellkit.cli.common import PASSTHROUGH_SETTINGS, UsageExitCommand, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.tmux import run_in_window

app = typer.Typer(help="Run a command in a new tmux window", add_completion=False)


def tmux_run(
    command: List[str] = typer.Argument(..., help="Command and its arguments"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Window name (default: command name)"),
    detach: bool = typer.Option(False, "--detach", "-d", help="Do not switch to the new window"),
    hold: bool = typer.Option(False, "--hold", help="Keep the window open after the command exits"),
):
    """
    Run COMMAND in a new window of the current tmux session.
    """
    try:
        run_in_window(command, name=name, detach=detach, hold=hold)
    except ShellkitError as e:
        fail(e)


app.command(cls=UsageExitCommand, context_settings=PASSTHROUGH_SETTINGS)(tmux_run)
