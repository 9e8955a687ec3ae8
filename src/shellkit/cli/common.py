"""
Pieces shared by every command: exit-status conventions, consoles and
context settings.
"""

from typing import NoReturn

import click
import typer
from rich.console import Console
from typer.core import TyperCommand, TyperGroup

from shellkit.core.shell import ShellkitError, UsageError

console = Console()
err_console = Console(stderr=True)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

# Commands that wrap another command: stop option parsing at the first
# positional so the wrapped command's own flags pass through.
PASSTHROUGH_SETTINGS = {**CONTEXT_SETTINGS, "allow_interspersed_args": False}


def _usage_exit(exc: click.UsageError) -> click.UsageError:
    exc.exit_code = 1
    return exc


class UsageExitCommand(TyperCommand):
    """A command whose usage errors exit with status 1 instead of click's 2."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            raise _usage_exit(exc)


class UsageExitGroup(TyperGroup):
    """Group counterpart of UsageExitCommand."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            raise _usage_exit(exc)

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as exc:
            raise _usage_exit(exc)


def fail(error: ShellkitError) -> NoReturn:
    """
    Turn a tool-layer error into the command's exit.

    Usage errors print the usage banner; everything else prints the message
    in red on stderr. Both exit with the error's exit code.
    """
    if isinstance(error, UsageError):
        exc = click.UsageError(str(error), ctx=click.get_current_context(silent=True))
        exc.exit_code = error.exit_code
        raise exc
    err_console.print(str(error), style="bold red", markup=False, highlight=False)
    raise typer.Exit(code=error.exit_code)
