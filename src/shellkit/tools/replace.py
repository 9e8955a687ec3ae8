"""
Literal (or regex) search and replace on top of sed.

Literal text is escaped before it is interpolated into the ``s///g``
expression so that sed metacharacters in the input never change the match.
Directory mode finds candidate files with grep and rewrites them in place in
parallel through ``xargs -P``.
"""

import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from shellkit.core import shell
from shellkit.core.config import get_settings
from shellkit.core.shell import UsageError

logger = logging.getLogger(__name__)

# Characters special in a sed basic regular expression, plus the delimiter.
_PATTERN_SPECIAL = re.compile(r"([\\/.*\[\]^$])")
# Characters special in the replacement part of s///.
_REPLACEMENT_SPECIAL = re.compile(r"([\\/&])")
# A delimiter not already escaped by the user.
_BARE_DELIMITER = re.compile(r"(?<!\\)/")


class ReplaceOptions(BaseModel):
    """Flags of one string-replace invocation."""
    before: str
    after: str
    path: Optional[Path] = None
    in_place: bool = False
    regex: bool = False
    recursive: bool = False
    dry_run: bool = False
    jobs: Optional[int] = Field(default=None, ge=1)


def escape_pattern(text: str) -> str:
    return _PATTERN_SPECIAL.sub(r"\\\1", text).replace("\n", r"\n")


def escape_replacement(text: str) -> str:
    return _REPLACEMENT_SPECIAL.sub(r"\\\1", text).replace("\n", "\\\n")


def escape_delimiter(text: str) -> str:
    return _BARE_DELIMITER.sub(r"\/", text)


def build_expression(before: str, after: str, regex: bool = False) -> str:
    """
    Build the sed substitution expression.

    In literal mode both sides are fully escaped. In regex mode only bare
    ``/`` delimiters are escaped so back references and groups still work.
    """
    if regex:
        return f"s/{escape_delimiter(before)}/{escape_delimiter(after)}/g"
    return f"s/{escape_pattern(before)}/{escape_replacement(after)}/g"


@lru_cache(maxsize=None)
def in_place_flags(sed: str) -> tuple:
    """GNU sed takes ``-i``, BSD sed needs an explicit empty backup suffix."""
    proc = shell.run([sed, "--version"], capture=True)
    if proc.returncode == 0 and "GNU" in proc.stdout:
        return ("-i",)
    return ("-i", "")


def validate(options: ReplaceOptions) -> None:
    """Raise UsageError for flag combinations that cannot work."""
    if not options.before:
        raise UsageError("BEFORE must not be empty")

    path = options.path
    if options.recursive:
        if path is not None and not path.is_dir():
            raise UsageError(f"not a directory: {path}")
        return

    if options.in_place and path is None:
        raise UsageError("-i needs a FILE to edit")
    if path is not None:
        if path.is_dir():
            raise UsageError(f"{path} is a directory, use -r")
        if not path.exists():
            raise UsageError(f"no such file: {path}")


def sed_command(options: ReplaceOptions, in_place: bool) -> List[str]:
    sed = get_settings().sed_command
    cmd = [sed]
    if in_place:
        cmd.extend(in_place_flags(sed))
    if options.regex:
        cmd.append("-E")
    cmd.extend(["-e", build_expression(options.before, options.after, options.regex)])
    return cmd


def replace_text(options: ReplaceOptions, data: bytes) -> bytes:
    """
    Run the substitution over ``data`` and return the result.

    Works on bytes so line endings and the encoding pass through untouched.
    """
    validate(options)
    cmd = sed_command(options, in_place=False)
    proc = shell.run(cmd, capture=True, input=data, check=True, text=False)
    return proc.stdout


def replace_file(options: ReplaceOptions) -> Optional[bytes]:
    """
    Apply the substitution to a single file.

    Returns the transformed content when the file is not edited in place
    (plain or dry-run invocation), otherwise None.
    """
    validate(options)
    write = options.in_place and not options.dry_run
    cmd = sed_command(options, in_place=write)
    cmd.extend(["--", str(options.path)])
    proc = shell.run(cmd, capture=not write, check=True, text=False)
    if write:
        logger.info("rewrote %s", options.path)
        return None
    return proc.stdout


def find_matching_files(options: ReplaceOptions) -> List[Path]:
    """List files under the directory that contain BEFORE, skipping .git and binaries."""
    root = options.path or Path(".")
    cmd = [
        "grep", "-rlIZ", "--exclude-dir=.git",
        "-E" if options.regex else "-F",
        "-e", options.before,
        "--", str(root),
    ]
    proc = shell.run(cmd, capture=True, text=False)
    # grep: 0 matches, 1 no match, 2 trouble
    if proc.returncode == 1:
        return []
    if proc.returncode != 0:
        raise shell.CommandFailedError(cmd, proc.returncode, os.fsdecode(proc.stderr))
    return [Path(os.fsdecode(name)) for name in proc.stdout.split(b"\0") if name]


def replace_directory(options: ReplaceOptions) -> List[Path]:
    """
    Rewrite every matching file under the directory in place.

    Returns the files that were (or, in dry-run mode, would be) rewritten.
    """
    validate(options)
    files = find_matching_files(options)
    if not files or options.dry_run:
        return files

    jobs = options.jobs or get_settings().replace_jobs
    cmd = ["xargs", "-0", "-P", str(jobs)] + sed_command(options, in_place=True) + ["--"]
    payload = b"\0".join(os.fsencode(f) for f in files)
    shell.run(cmd, input=payload, capture=True, check=True, text=False)
    logger.info("rewrote %d files with %d jobs", len(files), jobs)
    return files
