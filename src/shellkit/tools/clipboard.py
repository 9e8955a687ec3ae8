"""
Clipboard access through whichever platform tool is installed.
"""

import logging
import os
import platform
import shlex
from typing import Dict, List, Optional, Tuple

from shellkit.core import shell
from shellkit.core.config import get_settings
from shellkit.core.shell import ShellkitError

logger = logging.getLogger(__name__)

# Candidates in order of preference: (tool, argv)
READERS: Tuple[Tuple[str, List[str]], ...] = (
    ("pbpaste", ["pbpaste"]),
    ("wl-paste", ["wl-paste", "--no-newline"]),
    ("xclip", ["xclip", "-selection", "clipboard", "-o"]),
    ("xsel", ["xsel", "--clipboard", "--output"]),
)

WRITERS: Tuple[Tuple[str, List[str]], ...] = (
    ("pbcopy", ["pbcopy"]),
    ("wl-copy", ["wl-copy"]),
    ("xclip", ["xclip", "-selection", "clipboard", "-i"]),
    ("xsel", ["xsel", "--clipboard", "--input"]),
)


class ClipboardUnavailableError(ShellkitError):
    """No clipboard tool usable in this session."""


def _eligible(tool: str, env: Dict[str, str], system: str) -> bool:
    if tool in ("pbpaste", "pbcopy"):
        return system == "Darwin"
    if tool in ("wl-paste", "wl-copy"):
        return bool(env.get("WAYLAND_DISPLAY"))
    return True


def select_command(
    candidates: Tuple[Tuple[str, List[str]], ...],
    override: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    system: Optional[str] = None,
) -> List[str]:
    """
    Pick the clipboard command for this platform.

    An explicit override wins. Otherwise the first installed candidate that
    suits the platform and display server is used.
    """
    if override:
        return shlex.split(override)

    env = os.environ if env is None else env
    system = system or platform.system()
    for tool, argv in candidates:
        if _eligible(tool, env, system) and shell.which(tool):
            return list(argv)

    names = ", ".join(tool for tool, _ in candidates)
    raise ClipboardUnavailableError(f"no clipboard tool found (tried {names})")


def read_clipboard() -> str:
    cmd = select_command(READERS, get_settings().clipboard_read)
    proc = shell.run(cmd, capture=True, check=True)
    return proc.stdout


def write_clipboard(text: str) -> None:
    cmd = select_command(WRITERS, get_settings().clipboard_write)
    shell.run(cmd, input=text, capture=True, check=True)
    logger.debug("copied %d characters", len(text))
