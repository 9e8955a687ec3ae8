"""
Top-level CLI that aggregates every utility as a subcommand.
"""

import logging

import typer
from rich.table import Table

from shellkit import __version__
from shellkit.cli import case_cli, clipboard_cli, quiet_cli, replace_cli, squash_cli, ssh_cli, tmux_cli
from shellkit.cli.common import CONTEXT_SETTINGS, PASSTHROUGH_SETTINGS, UsageExitCommand, UsageExitGroup, console
from shellkit.core.config import get_settings
from shellkit.core.shell import which

main_app = typer.Typer(
    cls=UsageExitGroup,
    help="shellkit CLI",
    context_settings=CONTEXT_SETTINGS,
    no_args_is_help=True,
    add_completion=False,
)

# Delegate tools per command, for `info`
DELEGATES = {
    "replace": ["sed", "grep", "xargs"],
    "clip-read": ["pbpaste", "wl-paste", "xclip", "xsel"],
    "clip-write": ["pbcopy", "wl-copy", "xclip", "xsel"],
    "ssh-wait": ["ssh"],
    "squash": ["git"],
    "tmux-run": ["tmux"],
    "upper / lower": ["mv", "git"],
}


def _add(name: str, func, settings=CONTEXT_SETTINGS) -> None:
    main_app.command(name, cls=UsageExitCommand, context_settings=settings)(func)


_add("replace", replace_cli.string_replace)
_add("clip-read", clipboard_cli.clipboard_read)
_add("clip-write", clipboard_cli.clipboard_write)
_add("ssh-wait", ssh_cli.ssh_wait)
_add("squash", squash_cli.git_squash)
_add("tmux-run", tmux_cli.tmux_run, PASSTHROUGH_SETTINGS)
_add("upper", case_cli.path_uppercase)
_add("lower", case_cli.path_lowercase)
_add("quiet", quiet_cli.run_quiet_on_success, PASSTHROUGH_SETTINGS)


@main_app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log delegated commands"),
):
    """
    Small wrappers around sed, ssh, tmux, git and the clipboard.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main_app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)
def info():
    """
    Show which delegate tools are installed and the effective settings.
    """
    table = Table(title=f"shellkit {__version__}")
    table.add_column("Command", style="cyan")
    table.add_column("Tool", style="magenta")
    table.add_column("Path", style="green")

    for command, tools in DELEGATES.items():
        for tool in tools:
            path = which(tool)
            table.add_row(command, tool, path or "[red]not found[/red]")
    console.print(table)

    settings_table = Table(title="Settings (SHELLKIT_*)")
    settings_table.add_column("Name", style="cyan")
    settings_table.add_column("Value", style="green")
    for key, value in get_settings().model_dump().items():
        settings_table.add_row(key, "" if value is None else str(value))
    console.print(settings_table)


def main():
    main_app()


if __name__ == "__main__":
    main()
