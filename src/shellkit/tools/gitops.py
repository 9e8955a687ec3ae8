"""
Squash the commits of the current branch into one.

The plan is computed first (merge base, commits to fold) so the caller can
show it and ask for confirmation before anything is rewritten.
"""

import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel

from shellkit.core import shell
from shellkit.core.shell import CommandFailedError, ShellkitError

logger = logging.getLogger(__name__)


class GitError(ShellkitError):
    """Repository state does not allow the operation."""


class SquashPlan(BaseModel):
    branch: str
    target: str
    base: str
    head: str
    shas: List[str]
    # Aligned with shas; a commit made with --allow-empty-message has ""
    messages: List[str]

    @property
    def count(self) -> int:
        return len(self.shas)


def git(*args: str, cwd: Optional[str] = None, check: bool = True) -> str:
    """Run git and return its stripped stdout."""
    try:
        proc = shell.run(["git", *args], capture=True, cwd=cwd, check=check)
    except CommandFailedError as e:
        raise GitError(str(e))
    return proc.stdout.strip()


def current_branch(cwd: Optional[str] = None) -> str:
    if git("rev-parse", "--is-inside-work-tree", cwd=cwd, check=False) != "true":
        raise GitError("not inside a git work tree")
    branch = git("rev-parse", "--abbrev-ref", "HEAD", cwd=cwd)
    if branch == "HEAD":
        raise GitError("HEAD is detached; check out a branch first")
    return branch


def is_clean(cwd: Optional[str] = None) -> bool:
    """True when tracked files have no staged or unstaged changes."""
    return git("status", "--porcelain", "--untracked-files=no", cwd=cwd) == ""


def resolve(ref: str, cwd: Optional[str] = None) -> str:
    sha = git("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}", cwd=cwd, check=False)
    if not sha:
        raise GitError(f"unknown branch or commit: {ref}")
    return sha


def list_commits(base: str, head: str = "HEAD", cwd: Optional[str] = None) -> List[Tuple[str, str]]:
    """``(sha, message)`` for every commit of ``base..head``, oldest first."""
    out = git("log", "--reverse", "--format=%H%x1f%B%x00", f"{base}..{head}", cwd=cwd)
    commits = []
    for record in out.split("\0"):
        record = record.strip()
        if not record:
            continue
        sha, _, message = record.partition("\x1f")
        commits.append((sha, message.strip()))
    return commits


def plan_squash(target: str, cwd: Optional[str] = None) -> SquashPlan:
    branch = current_branch(cwd)
    if branch == target:
        raise GitError(f"already on {target}; check out the branch to squash")
    target_sha = resolve(target, cwd)
    if not is_clean(cwd):
        raise GitError("working tree has uncommitted changes")

    head = resolve("HEAD", cwd)
    base = git("merge-base", "HEAD", target_sha, cwd=cwd, check=False)
    if not base:
        raise GitError(f"{branch} and {target} have no common history")

    commits = list_commits(base, head, cwd)
    plan = SquashPlan(
        branch=branch,
        target=target,
        base=base,
        head=head,
        shas=[sha for sha, _ in commits],
        messages=[message for _, message in commits],
    )
    logger.debug("squash plan: %s", plan)
    return plan


def combined_message(plan: SquashPlan) -> str:
    messages = [message for message in plan.messages if message]
    if not messages:
        return f"Squash {plan.count} commits from {plan.branch}\n"
    return "\n\n".join(messages) + "\n"


def squash(
    plan: SquashPlan,
    message: Optional[str] = None,
    edit: bool = True,
    cwd: Optional[str] = None,
) -> str:
    """
    Rewrite the branch as a single commit on top of the merge base.

    If the commit does not go through (hook failure, empty message in the
    editor) the branch is put back where it was. Returns the new commit sha.
    """
    git("reset", "--soft", plan.base, cwd=cwd)

    cmd = ["git", "commit", "-m", message or combined_message(plan)]
    if edit:
        cmd.append("--edit")
    # The editor needs the terminal, so output is not captured.
    proc = shell.run(cmd, capture=not edit, cwd=cwd)
    if proc.returncode != 0:
        git("reset", "--soft", plan.head, cwd=cwd)
        reason = (proc.stderr or "").strip() if not edit else ""
        summary = f"commit failed, {plan.branch} restored to {plan.head[:12]}"
        raise GitError(f"{summary}: {reason}" if reason else summary)

    return git("rev-parse", "HEAD", cwd=cwd)
