"""Step functions for the hotfix workflow.

Every step is a thin composition of git / gh calls. Steps record what they
produce on the shared :class:`WorkflowState` so later steps, and rollback, can
use it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from . import git_ops, github
from .commit_message import Prompt
from .data_types import HotfixSettings, MergeOutcome
from .executor import CommandError
from .state import WorkflowState
from .utils import human_timestamp

BRANCH_PREFIX = "hotfix-"
BRANCH_TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
PR_BODY_TEMPLATE = "Automated hotfix created at {timestamp}"


class ManualMergeNotConfirmed(RuntimeError):
    """Raised when input closes while waiting for the operator to merge manually."""

    def __init__(self, branch_name: str) -> None:
        super().__init__(f"Input closed before the manual merge of {branch_name} was confirmed")
        self.branch_name = branch_name


def generate_branch_name(moment: datetime) -> str:
    """Return ``hotfix-YYYY-MM-DD-HH-MM-SS`` for ``moment`` in UTC.

    Naive datetimes are taken to already be UTC.

    Examples:
        >>> generate_branch_name(datetime(2025, 7, 30, 14, 30, 45, 123000))
        'hotfix-2025-07-30-14-30-45'
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{BRANCH_PREFIX}{moment.strftime(BRANCH_TIMESTAMP_FORMAT)}"


def pr_title(message: str, max_length: int = 70) -> str:
    return message[:max_length]


def pr_body(moment: datetime) -> str:
    return PR_BODY_TEMPLATE.format(timestamp=human_timestamp(moment))


def create_and_switch_branch(state: WorkflowState, logger: logging.Logger) -> None:
    logger.info(f"🌿 Creating and switching to branch: {state.branch_name}")
    git_ops.create_branch(state.branch_name)


def commit_changes(state: WorkflowState, logger: logging.Logger) -> None:
    logger.info("📦 Staging and committing changes...")
    git_ops.stage_all()
    git_ops.commit(state.commit_message)
    logger.info("✅ Changes committed")


def push_branch(state: WorkflowState, settings: HotfixSettings, logger: logging.Logger) -> None:
    logger.info(f"⬆️ Pushing branch to {settings.remote}...")
    git_ops.push_branch(state.branch_name, remote=settings.remote)


def create_pull_request(
    state: WorkflowState,
    settings: HotfixSettings,
    logger: logging.Logger,
    now: datetime,
) -> str:
    logger.info("🔄 Creating pull request...")
    url = github.create_pull_request(
        title=pr_title(state.commit_message, settings.pr_title_max_length),
        body=pr_body(now),
        base=settings.trunk_branch,
        head=state.branch_name,
    )
    state.pr_url = url or None
    if url:
        logger.info(f"✅ Pull request created: {url}")
    else:
        logger.info("✅ Pull request created")
    return url


def merge_pull_request(
    state: WorkflowState,
    settings: HotfixSettings,
    logger: logging.Logger,
    prompt: Prompt,
    sleep: Callable[[float], None],
) -> MergeOutcome:
    """Merge the pull request, degrading to a manual merge in the browser.

    A rejected auto-merge (pending checks, conflicts, branch protection) is an
    expected outcome: the operator merges by hand and confirms with Enter.
    """
    logger.info("🔀 Merging pull request...")

    # Give GitHub a moment to finish creating the pull request.
    sleep(settings.merge_delay_seconds)

    try:
        github.merge_pull_request(state.branch_name)
    except CommandError as exc:
        logger.debug(f"Automatic merge rejected: {exc.message}")
    else:
        logger.info("✅ Pull request merged and remote branch deleted")
        return MergeOutcome.AUTOMATIC

    logger.warning("⚠️ Automatic merge failed. Opening pull request for manual merge...")
    try:
        github.view_pull_request_in_browser(state.branch_name)
    except CommandError as exc:
        target = state.pr_url or state.branch_name
        logger.warning(f"⚠️ Could not open a browser ({exc.message}). Open {target} manually.")

    logger.info("📝 Please merge the pull request manually in your browser.")
    try:
        prompt("⌨️ Press Enter after you have merged the pull request to continue...")
    except EOFError as exc:
        raise ManualMergeNotConfirmed(state.branch_name) from exc

    logger.info("✅ Manual merge completed, continuing with cleanup...")
    return MergeOutcome.MANUAL


def cleanup(state: WorkflowState, settings: HotfixSettings, logger: logging.Logger) -> None:
    """Return to an up-to-date trunk and drop the local hotfix branch."""

    logger.info("🧹 Cleaning up...")
    git_ops.checkout_branch(settings.trunk_branch)
    git_ops.pull(settings.trunk_branch, remote=settings.remote)

    try:
        git_ops.delete_local_branch(state.branch_name)
        logger.info(f"✅ Local branch {state.branch_name} deleted")
    except CommandError:
        logger.info(f"ℹ️ Local branch {state.branch_name} already deleted or not found")

    logger.info("✅ Cleanup completed")


def rollback(state: WorkflowState, logger: logging.Logger) -> bool:
    """Best-effort return to the original branch and removal of the hotfix branch.

    Never raises. Returns True when the original branch was restored (or there
    was nothing to restore).
    """
    logger.info("🔄 Rolling back changes...")

    try:
        if state.original_branch:
            git_ops.checkout_branch(state.original_branch)
    except CommandError as exc:
        logger.error(f"⚠️ Rollback failed: {exc}")
        return False

    if state.branch_name:
        try:
            git_ops.delete_local_branch(state.branch_name)
        except CommandError:
            logger.debug(f"Branch {state.branch_name} not deleted during rollback (never created or already gone)")

    logger.info("✅ Rollback completed")
    return True


__all__ = [
    "BRANCH_PREFIX",
    "BRANCH_TIMESTAMP_FORMAT",
    "ManualMergeNotConfirmed",
    "PR_BODY_TEMPLATE",
    "cleanup",
    "commit_changes",
    "create_and_switch_branch",
    "create_pull_request",
    "generate_branch_name",
    "merge_pull_request",
    "pr_body",
    "pr_title",
    "push_branch",
    "rollback",
]
