"""
git-squash: fold the current branch's commits into one.
"""

import logging
from typing import Optional

import typer
from rich.panel import Panel
from rich.text import Text

from shellkit.cli.common import CONTEXT_SETTINGS, UsageExitCommand, console, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.gitops import plan_squash, squash

logger = logging.getLogger(__name__)

app = typer.Typer(help="Squash branch commits", add_completion=False)


def git_squash(
    branch: str = typer.Argument(..., help="Branch the current branch was forked from"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Message for the squashed commit"),
    edit: bool = typer.Option(True, "--edit/--no-edit", help="Open the editor on the commit message"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """
    Squash every commit of the current branch not on BRANCH into a single commit.
    """
    try:
        plan = plan_squash(branch)
    except ShellkitError as e:
        fail(e)

    if plan.count == 0:
        console.print(f"[yellow]Nothing to squash: {plan.branch} has no commits beyond {branch}[/yellow]")
        return
    if plan.count == 1:
        console.print(f"[yellow]{plan.branch} already has a single commit beyond {branch}[/yellow]")
        return

    summary = "\n".join(
        f"- {sha[:7]} {message.splitlines()[0] if message else '(no message)'}"
        for sha, message in zip(plan.shas, plan.messages)
    )
    console.print(Panel(Text(summary), title=f"{plan.count} commits on {plan.branch}"))

    if not yes:
        # Abort exits 1
        typer.confirm(f"Squash {plan.count} commits into one?", abort=True)

    try:
        sha = squash(plan, message=message, edit=edit)
    except ShellkitError as e:
        fail(e)

    console.print(f"[green]Squashed {plan.count} commits into {sha[:12]}[/green]")


app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(git_squash)
