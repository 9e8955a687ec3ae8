"""
Rename a path so its final component is upper or lower case.

The rename itself is delegated to ``mv`` (or ``git mv``). On case-insensitive
file systems the old and new names refer to the same file, so the rename goes
through a temporary name.
"""

import logging
import os
import uuid
from enum import Enum
from pathlib import Path
from typing import List, Optional

from shellkit.core import shell
from shellkit.core.shell import CommandFailedError, ShellkitError, UsageError

logger = logging.getLogger(__name__)


class Case(str, Enum):
    UPPER = "upper"
    LOWER = "lower"


class PathExistsError(ShellkitError):
    """The target name is taken by a different file."""


def convert_name(name: str, case: Case, with_suffix: bool = False) -> str:
    """
    Convert ``name`` to ``case``. The suffix keeps its case unless
    ``with_suffix`` is set; dotfiles have no suffix.
    """
    convert = str.upper if case == Case.UPPER else str.lower
    if with_suffix:
        return convert(name)
    stem, dot, suffix = name.rpartition(".")
    if not stem:
        return convert(name)
    return convert(stem) + dot + suffix


def target_path(path: Path, case: Case, with_suffix: bool = False) -> Path:
    return path.with_name(convert_name(path.name, case, with_suffix))


def _mv(use_git: bool) -> List[str]:
    return ["git", "mv"] if use_git else ["mv"]


def same_entry(path: Path, target: Path) -> bool:
    """
    True when ``target`` is ``path`` spelled differently, as on a
    case-insensitive file system. Symlinks are not followed.
    """
    if target.name in os.listdir(path.parent):
        return False
    return os.path.samestat(os.lstat(path), os.lstat(target))


def change_case(
    path: Path,
    case: Case,
    with_suffix: bool = False,
    use_git: bool = False,
) -> Optional[Path]:
    """
    Rename ``path`` and return the new path, or None if already in case.

    Raises CommandFailedError carrying ``mv``'s exit status if it fails.
    """
    if not os.path.lexists(path):
        raise UsageError(f"no such file or directory: {path}")
    if path.name in ("", ".", ".."):
        raise UsageError(f"cannot rename {path}")

    target = target_path(path, case, with_suffix)
    if target.name == path.name:
        logger.info("%s already %s case", path, case.value)
        return None

    mv = _mv(use_git)
    if os.path.lexists(target):
        if not same_entry(path, target):
            raise PathExistsError(f"{target} already exists")
        temp = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}")
        shell.run(mv + ["--", str(path), str(temp)], check=True)
        try:
            shell.run(mv + ["--", str(temp), str(target)], check=True)
        except CommandFailedError:
            shell.run(mv + ["--", str(temp), str(path)], check=True)
            raise
    else:
        shell.run(mv + ["--", str(path), str(target)], check=True)

    logger.info("renamed %s -> %s", path, target)
    return target
