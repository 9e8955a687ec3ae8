"""
Launch a command in a new tmux window.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from shellkit.core import shell
from shellkit.core.config import get_settings
from shellkit.core.shell import ShellkitError

logger = logging.getLogger(__name__)


class TmuxError(ShellkitError):
    """tmux is unavailable or refused the request."""


def inside_tmux(env: Optional[Dict[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    return bool(env.get("TMUX"))


def window_command(
    command: Sequence[str],
    name: Optional[str] = None,
    cwd: Optional[str] = None,
) -> List[str]:
    """
    Build the ``tmux new-window`` argument vector.

    The window is always created detached and its id printed, so later
    commands can target it whether or not it becomes current.
    """
    tmux = get_settings().tmux_command
    cmd = [tmux, "new-window", "-d", "-P", "-F", "#{window_id}"]
    cmd.extend(["-n", name or Path(command[0]).name])
    cmd.extend(["-c", cwd or os.getcwd()])
    cmd.append("--")
    cmd.extend(command)
    return cmd


def _tmux(cmd: List[str]) -> str:
    proc = shell.run(cmd, capture=True)
    if proc.returncode != 0:
        raise TmuxError(f"tmux failed: {proc.stderr.strip() or proc.returncode}")
    return proc.stdout.strip()


def run_in_window(
    command: Sequence[str],
    name: Optional[str] = None,
    detach: bool = False,
    hold: bool = False,
    env: Optional[Dict[str, str]] = None,
) -> str:
    """Open ``command`` in a new window and return the window id."""
    if not command:
        raise shell.UsageError("missing COMMAND")
    if not inside_tmux(env):
        raise TmuxError("not inside a tmux session")
    if shell.which(command[0]) is None:
        raise TmuxError(f"command not found: {command[0]}")
    tmux = get_settings().tmux_command
    shell.require(tmux)

    window_id = _tmux(window_command(command, name=name))
    if hold:
        _tmux([tmux, "set-option", "-w", "-t", window_id, "remain-on-exit", "on"])
    if not detach:
        _tmux([tmux, "select-window", "-t", window_id])
    logger.info("opened window %s for %s", window_id, command[0])
    return window_id
