"""In-memory run state for hotfix workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .data_types import MergeOutcome, WorkflowPhase


@dataclass
class WorkflowState:
    """Mutable state owned by the orchestrator for one run.

    Nothing here is persisted: the only durable effects of a run are the
    branches, commits and pull requests it leaves in git and on GitHub.
    ``phase`` only moves forward and is what rollback consults to decide
    whether anything needs undoing.
    """

    run_id: str
    original_branch: Optional[str] = None
    branch_name: Optional[str] = None
    commit_message: Optional[str] = None
    phase: WorkflowPhase = WorkflowPhase.VALIDATE
    pr_url: Optional[str] = None
    merge_outcome: Optional[MergeOutcome] = None

    def advance(self, phase: WorkflowPhase) -> None:
        if phase.order < self.phase.order:
            raise ValueError(f"Cannot move workflow back from {self.phase.value} to {phase.value}")
        self.phase = phase

    @property
    def needs_rollback(self) -> bool:
        return self.phase.mutating

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "run_id": self.run_id,
            "original_branch": self.original_branch,
            "branch_name": self.branch_name,
            "commit_message": self.commit_message,
            "phase": self.phase.value,
            "pr_url": self.pr_url,
            "merge_outcome": self.merge_outcome.value if self.merge_outcome else None,
        }
        return {key: value for key, value in payload.items() if value is not None}


__all__ = ["WorkflowState"]
