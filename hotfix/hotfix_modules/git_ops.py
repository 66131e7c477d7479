"""Git command helpers used by the hotfix workflow.

Each helper maps to a single git invocation so callers can reason about side
effects. Failures surface as :class:`CommandError` from the executor.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from . import executor
from .executor import CommandError


def _run_git(args: Iterable[str], cwd: Path | None = None) -> str:
    """Execute a git command and return its raw stdout."""

    return executor.execute_command(["git", *args], cwd=cwd)


def is_inside_work_tree(cwd: Path | None = None) -> bool:
    """Return True if ``cwd`` belongs to a git repository."""

    try:
        _run_git(["rev-parse", "--git-dir"], cwd=cwd)
    except CommandError:
        return False
    return True


def get_current_branch(cwd: Path | None = None) -> str:
    """Return the checked out branch name, or an empty string on a detached HEAD."""

    return _run_git(["branch", "--show-current"], cwd=cwd).strip()


def get_status(cwd: Path | None = None) -> str:
    """Return porcelain status output for tracked and untracked changes."""

    return _run_git(["status", "--porcelain"], cwd=cwd)


def create_branch(branch_name: str, cwd: Path | None = None) -> None:
    """Create ``branch_name`` from HEAD and switch to it."""

    _run_git(["checkout", "-b", branch_name], cwd=cwd)


def checkout_branch(branch_name: str, cwd: Path | None = None) -> None:
    _run_git(["checkout", branch_name], cwd=cwd)


def stage_all(cwd: Path | None = None) -> None:
    """Stage every pending change, including untracked files and deletions."""

    _run_git(["add", "--all"], cwd=cwd)


def commit(message: str, cwd: Path | None = None) -> None:
    _run_git(["commit", "-m", message], cwd=cwd)


def push_branch(branch_name: str, remote: str = "origin", cwd: Path | None = None) -> None:
    """Push the branch and record the remote branch as its upstream."""

    _run_git(["push", "--set-upstream", remote, branch_name], cwd=cwd)


def pull(branch_name: str, remote: str = "origin", cwd: Path | None = None) -> None:
    _run_git(["pull", remote, branch_name], cwd=cwd)


def delete_local_branch(branch_name: str, cwd: Path | None = None) -> None:
    """Force-delete a local branch; raises if it does not exist or is checked out."""

    _run_git(["branch", "-D", branch_name], cwd=cwd)


__all__ = [
    "checkout_branch",
    "commit",
    "create_branch",
    "delete_local_branch",
    "get_current_branch",
    "get_status",
    "is_inside_work_tree",
    "pull",
    "push_branch",
    "stage_all",
]
