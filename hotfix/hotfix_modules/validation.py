"""Pre-flight validation for the hotfix workflow.

Checks run in order and stop at the first failure:

1. The current directory is inside a git working tree.
2. The GitHub CLI has an authenticated session.
3. The checked out branch is the configured trunk branch.
4. The working tree has at least one pending change (tracked or untracked).

Nothing is mutated before these checks pass, so a pre-flight failure never
needs a rollback.
"""

from __future__ import annotations

import logging

from . import git_ops, github
from .data_types import HotfixSettings
from .state import WorkflowState


class PreflightError(RuntimeError):
    """Base class for environment problems detected before any mutation."""


class NotARepository(PreflightError):
    def __init__(self) -> None:
        super().__init__("Not in a git repository")


class NotAuthenticated(PreflightError):
    def __init__(self) -> None:
        super().__init__("GitHub CLI not authenticated. Run: gh auth login")


class WrongBranch(PreflightError):
    def __init__(self, actual: str, expected: str) -> None:
        shown = actual or "(detached HEAD)"
        super().__init__(f"Must be on {expected} branch. Currently on: {shown}")
        self.actual = actual
        self.expected = expected


class NoChanges(PreflightError):
    def __init__(self) -> None:
        super().__init__("No changes to commit")


def validate_environment(state: WorkflowState, settings: HotfixSettings, logger: logging.Logger) -> None:
    """Run the pre-flight checks and record the starting branch on ``state``.

    Raises:
        NotARepository, NotAuthenticated, WrongBranch, NoChanges
    """
    logger.info("🔍 Validating environment...")

    if not git_ops.is_inside_work_tree():
        raise NotARepository()

    if not github.is_authenticated():
        raise NotAuthenticated()

    current = git_ops.get_current_branch()
    state.original_branch = current or None
    if current != settings.trunk_branch:
        raise WrongBranch(current, settings.trunk_branch)

    status = git_ops.get_status()
    if not status.strip():
        raise NoChanges()
    logger.debug(f"Pending changes:\n{status.rstrip()}")

    logger.info("✅ Environment validation passed")


__all__ = [
    "NoChanges",
    "NotARepository",
    "NotAuthenticated",
    "PreflightError",
    "WrongBranch",
    "validate_environment",
]
