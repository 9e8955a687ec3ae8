"""
Subprocess helpers shared by every command: tool lookup, logged invocation,
and the error types the CLI layer turns into exit codes.
"""

import logging
import shlex
import shutil
import subprocess
from typing import Optional, Sequence, Union

logger = logging.getLogger(__name__)


class ShellkitError(Exception):
    """Base error; ``exit_code`` is what the command exits with."""

    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(ShellkitError):
    """Invalid arguments detected after parsing."""


class ToolNotFoundError(ShellkitError):
    """A delegate tool is not installed."""

    def __init__(self, name: str):
        super().__init__(f"required tool not found on PATH: {name}")
        self.name = name


class CommandFailedError(ShellkitError):
    """A delegate tool exited with a non-zero status."""

    def __init__(self, cmd: Sequence[str], returncode: int, stderr: str = ""):
        message = f"{shlex.join(cmd)} exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message, exit_code=exit_status(returncode))
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to a shell exit status."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def which(name: str) -> Optional[str]:
    return shutil.which(name)


def require(name: str) -> str:
    path = which(name)
    if path is None:
        raise ToolNotFoundError(name)
    return path


def run(
    cmd: Sequence[str],
    *,
    capture: bool = False,
    input: Optional[Union[str, bytes]] = None,
    cwd: Optional[str] = None,
    check: bool = False,
    text: bool = True,
) -> subprocess.CompletedProcess:
    """
    Run ``cmd`` and return the completed process.

    With ``capture`` stdout and stderr are collected, otherwise they are
    inherited. With ``check`` a non-zero status raises CommandFailedError.
    A missing executable raises ToolNotFoundError.
    """
    logger.debug("running: %s", shlex.join(cmd))
    try:
        proc = subprocess.run(
            list(cmd),
            input=input,
            cwd=cwd,
            capture_output=capture,
            text=text,
        )
    except FileNotFoundError:
        raise ToolNotFoundError(cmd[0])

    logger.debug("%s exited with %s", cmd[0], proc.returncode)
    if check and proc.returncode != 0:
        stderr = proc.stderr if capture else ""
        if isinstance(stderr, bytes):
            stderr = stderr.decode(errors="replace")
        raise CommandFailedError(cmd, proc.returncode, stderr or "")
    return proc
