"""
clipboard-read / clipboard-write: move text between the clipboard and stdio.
"""

import sys

import typer

from shellkit.cli.common import CONTEXT_SETTINGS, UsageExitCommand, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.clipboard import read_clipboard, write_clipboard

read_app = typer.Typer(help="Print the clipboard", add_completion=False)
write_app = typer.Typer(help="Copy stdin to the clipboard", add_completion=False)


def clipboard_read():
    """
    Print the clipboard contents to stdout.
    """
    try:
        typer.echo(read_clipboard(), nl=False)
    except ShellkitError as e:
        fail(e)


def clipboard_write():
    """
    Copy standard input to the clipboard.
    """
    try:
        write_clipboard(sys.stdin.read())
    except ShellkitError as e:
        fail(e)


read_app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(clipboard_read)
write_app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(clipboard_write)
