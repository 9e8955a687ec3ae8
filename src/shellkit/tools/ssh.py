"""
Poll a host until it accepts SSH connections.
"""

import logging
import os
import time
from typing import Callable, List, Optional

from shellkit.core import shell
from shellkit.core.config import get_settings
from shellkit.core.shell import ShellkitError

logger = logging.getLogger(__name__)


class WaitTimeoutError(ShellkitError):
    """The host did not become reachable in time."""


def ssh_options(port: Optional[int] = None, connect_timeout: Optional[int] = None) -> List[str]:
    timeout = connect_timeout or get_settings().ssh_connect_timeout
    opts = ["-o", "BatchMode=yes", "-o", f"ConnectTimeout={timeout}"]
    if port:
        opts.extend(["-p", str(port)])
    return opts


def probe(host: str, port: Optional[int] = None) -> bool:
    """True when ``ssh host true`` succeeds."""
    cmd = ["ssh"] + ssh_options(port) + [host, "true"]
    proc = shell.run(cmd, capture=True)
    return proc.returncode == 0


def wait_for_host(
    host: str,
    interval: Optional[float] = None,
    timeout: float = 0,
    port: Optional[int] = None,
    check: Callable[..., bool] = probe,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    on_attempt: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Block until ``host`` is reachable and return the number of attempts.

    A ``timeout`` of 0 waits forever; otherwise WaitTimeoutError is raised
    once the deadline passes.
    """
    if interval is None:
        interval = get_settings().ssh_wait_interval
    deadline = clock() + timeout if timeout else None

    attempt = 0
    while True:
        attempt += 1
        if on_attempt:
            on_attempt(attempt)
        if check(host, port):
            logger.info("%s reachable after %d attempts", host, attempt)
            return attempt
        if deadline is not None and clock() + interval > deadline:
            raise WaitTimeoutError(f"{host} not reachable after {timeout:g}s")
        sleep(interval)


def connect(host: str, port: Optional[int] = None) -> None:
    """Replace the current process with an interactive ssh session."""
    argv = ["ssh"] + (["-p", str(port)] if port else []) + [host]
    logger.debug("exec: %s", " ".join(argv))
    os.execvp("ssh", argv)
