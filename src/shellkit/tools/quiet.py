"""
Run a command silently unless it fails.

Output (stdout and stderr interleaved) goes to a temporary file that is only
read back when the command exits non-zero.
"""

import logging
import shlex
import subprocess
import tempfile
from typing import Optional, Sequence

from pydantic import BaseModel

from shellkit.core.config import get_settings
from shellkit.core.shell import UsageError, exit_status

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
INTERRUPTED = 130


class QuietResult(BaseModel):
    command: list
    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def error_line(self) -> str:
        return f"{shlex.join(self.command)} exited with status {self.exit_code}"


def run_quietly(command: Sequence[str], tmpdir: Optional[str] = None) -> QuietResult:
    """
    Run ``command`` with its output buffered in a temporary file.

    The captured output is only returned for a non-zero exit.
    """
    if not command:
        raise UsageError("missing COMMAND")

    command = list(command)
    tmpdir = tmpdir or get_settings().quiet_tmpdir
    logger.debug("running quietly: %s", shlex.join(command))

    # TemporaryFile is unlinked on close, which covers interrupts too.
    with tempfile.TemporaryFile(dir=tmpdir) as buffer:
        try:
            proc = subprocess.run(command, stdout=buffer, stderr=subprocess.STDOUT)
        except FileNotFoundError:
            return QuietResult(
                command=command,
                exit_code=COMMAND_NOT_FOUND,
                output=f"{command[0]}: command not found\n",
            )
        except PermissionError:
            return QuietResult(
                command=command,
                exit_code=126,
                output=f"{command[0]}: permission denied\n",
            )
        except KeyboardInterrupt:
            buffer.seek(0)
            return QuietResult(
                command=command,
                exit_code=INTERRUPTED,
                output=buffer.read().decode(errors="replace"),
            )

        code = exit_status(proc.returncode)
        if code == 0:
            return QuietResult(command=command, exit_code=0)

        buffer.seek(0)
        return QuietResult(
            command=command,
            exit_code=code,
            output=buffer.read().decode(errors="replace"),
        )
