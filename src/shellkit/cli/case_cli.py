"""
path-uppercase / path-lowercase: change the case of a file or directory name.
"""

from pathlib import Path

import typer

from shellkit.cli.common import CONTEXT_SETTINGS, UsageExitCommand, console, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.pathcase import Case, change_case

upper_app = typer.Typer(help="Upper-case a file name", add_completion=False)
lower_app = typer.Typer(help="Lower-case a file name", add_completion=False)


def _rename(path: Path, case: Case, with_suffix: bool, use_git: bool) -> None:
    try:
        target = change_case(path, case, with_suffix=with_suffix, use_git=use_git)
    except ShellkitError as e:
        fail(e)
    if target is not None:
        console.print(f"{path} -> {target}", markup=False, highlight=False)


def path_uppercase(
    path: Path = typer.Argument(..., help="File or directory to rename"),
    with_suffix: bool = typer.Option(False, "--with-suffix", "-s", help="Upper-case the extension too"),
    use_git: bool = typer.Option(False, "--git", "-g", help="Rename with git mv"),
):
    """
    Rename PATH so its name is upper case.
    """
    _rename(path, Case.UPPER, with_suffix, use_git)


def path_lowercase(
    path: Path = typer.Argument(..., help="File or directory to rename"),
    with_suffix: bool = typer.Option(False, "--with-suffix", "-s", help="Lower-case the extension too"),
    use_git: bool = typer.Option(False, "--git", "-g", help="Rename with git mv"),
):
    """
    Rename PATH so its name is lower case.
    """
    _rename(path, Case.LOWER, with_suffix, use_git)


upper_app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(path_uppercase)
lower_app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(path_lowercase)
