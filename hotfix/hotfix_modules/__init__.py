"""Shared module namespace for hotfix workflow helpers."""

from . import (
    commit_message,
    data_types,
    executor,
    exit_codes,
    git_ops,
    github,
    orchestrator,
    state,
    utils,
    validation,
    workflow_ops,
)

__all__ = [
    "commit_message",
    "data_types",
    "executor",
    "exit_codes",
    "git_ops",
    "github",
    "orchestrator",
    "state",
    "utils",
    "validation",
    "workflow_ops",
]
