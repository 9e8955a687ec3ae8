"""
ssh-wait: block until a host accepts SSH connections.
"""

from typing import Optional

import typer

from shellkit.cli.common import CONTEXT_SETTINGS, UsageExitCommand, console, fail
from shellkit.core.shell import ShellkitError
from shellkit.tools.ssh import connect as ssh_connect, wait_for_host

app = typer.Typer(help="Wait for SSH to come up", add_completion=False)


def ssh_wait(
    host: str = typer.Argument(..., help="Host (or user@host) to poll"),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", min=0, help="Seconds between attempts (default SHELLKIT_SSH_WAIT_INTERVAL)"
    ),
    timeout: float = typer.Option(0, "--timeout", "-t", min=0, help="Give up after this many seconds; 0 waits forever"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="SSH port"),
    connect: bool = typer.Option(False, "--connect", "-c", help="Open an ssh session once reachable"),
):
    """
    Poll HOST until it accepts an SSH connection.
    """
    try:
        with console.status(f"Waiting for {host}...") as status:
            attempts = wait_for_host(
                host,
                interval=interval,
                timeout=timeout,
                port=port,
                on_attempt=lambda n: status.update(f"Waiting for {host} (attempt {n})..."),
            )
    except KeyboardInterrupt:
        raise typer.Exit(code=130)
    except ShellkitError as e:
        fail(e)

    console.print(f"[green]{host} is up[/green] after {attempts} attempt(s)")
    if connect:
        ssh_connect(host, port)


app.command(cls=UsageExitCommand, context_settings=CONTEXT_SETTINGS)(ssh_wait)
