"""GitHub CLI helpers for hotfix pull requests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from . import executor
from .executor import CommandError


def _run_gh(args: Iterable[str], cwd: Path | None = None) -> str:
    return executor.execute_command(["gh", *args], cwd=cwd)


def is_authenticated(cwd: Path | None = None) -> bool:
    """Return True if ``gh auth status`` reports a logged-in session."""

    try:
        _run_gh(["auth", "status"], cwd=cwd)
    except CommandError:
        return False
    return True


def create_pull_request(title: str, body: str, base: str, head: str, cwd: Path | None = None) -> str:
    """Open a pull request from ``head`` onto ``base`` and return the URL gh prints."""

    output = _run_gh(
        ["pr", "create", "--title", title, "--body", body, "--base", base, "--head", head],
        cwd=cwd,
    )
    return output.strip()


def merge_pull_request(branch_name: str, cwd: Path | None = None) -> None:
    """Merge the branch's pull request with a merge commit once it is mergeable.

    Uses GitHub auto-merge and deletes the remote branch afterwards.
    """

    _run_gh(["pr", "merge", branch_name, "--merge", "--delete-branch", "--auto"], cwd=cwd)


def view_pull_request_in_browser(branch_name: str, cwd: Path | None = None) -> None:
    _run_gh(["pr", "view", branch_name, "--web"], cwd=cwd)


__all__ = [
    "create_pull_request",
    "is_authenticated",
    "merge_pull_request",
    "view_pull_request_in_browser",
]
