"""
string-replace: replace literal text in stdin, a file, or a directory tree.
"""

import logging
from pathlib import Path
from typing import Optional

import click
import typer

from shellkit.cli.common import CONTEXT_SETTINGS, UsageExitCommand, err_console, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.replace import (
    ReplaceOptions,
    replace_directory,
    replace_file,
    replace_text,
    validate,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Replace text using sed", add_completion=False)


def string_replace(
    before: str = typer.Argument(..., help="Text to search for (literal unless -e)"),
    after: str = typer.Argument(..., help="Replacement text"),
    file: Optional[Path] = typer.Argument(
        None, help="File to transform, or directory with -r. Reads stdin when omitted."
    ),
    in_place: bool = typer.Option(False, "-i", "--in-place", help="Edit FILE in place"),
    regex: bool = typer.Option(False, "-e", "--regex", help="Treat BEFORE as an extended regex"),
    recursive: bool = typer.Option(
        False, "-r", "--recursive", help="Rewrite every matching file under the directory FILE"
    ),
    dry_run: bool = typer.Option(
        False, "-d", "--dry-run", help="Print the result, or the files that would change, without writing"
    ),
):
    """
    Replace every occurrence of BEFORE with AFTER.
    """
    options = ReplaceOptions(
        before=before,
        after=after,
        path=file,
        in_place=in_place,
        regex=regex,
        recursive=recursive,
        dry_run=dry_run,
    )

    try:
        validate(options)
        if recursive:
            files = replace_directory(options)
            for path in files:
                typer.echo(str(path))
            if not files:
                err_console.print("[yellow]No files matched[/yellow]")
        elif file is None:
            data = click.get_binary_stream("stdin").read()
            typer.echo(replace_text(options, data), nl=False)
        else:
            output = replace_file(options)
            if output is not None:
                typer.echo(output, nl=False)
    except ShellkitError as e:
        fail(e)


app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(string_replace)


if __name__ == "__main__":
    app()
