"""Data models and configuration for hotfix workflows."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkflowPhase(str, Enum):
    """Phases of a hotfix run, in execution order."""
    VALIDATE = "validate"
    COMMIT_MESSAGE = "commit_message"
    BRANCH_NAME = "branch_name"
    CREATE_BRANCH = "create_branch"
    COMMIT = "commit"
    PUSH = "push"
    CREATE_PR = "create_pr"
    MERGE = "merge"
    CLEANUP = "cleanup"
    COMPLETE = "complete"

    @property
    def order(self) -> int:
        return PHASE_ORDER.index(self)

    @property
    def mutating(self) -> bool:
        """True once the working tree may differ from what the operator started with."""
        return PHASE_ORDER.index(WorkflowPhase.CREATE_BRANCH) <= self.order < PHASE_ORDER.index(WorkflowPhase.COMPLETE)


PHASE_ORDER: tuple[WorkflowPhase, ...] = tuple(WorkflowPhase)


class MergeOutcome(str, Enum):
    """How the pull request ended up merged."""
    AUTOMATIC = "automatic"
    MANUAL = "manual"


# Environment variable -> settings field
SETTINGS_ENV_VARS = {
    "HOTFIX_TRUNK_BRANCH": "trunk_branch",
    "HOTFIX_REMOTE": "remote",
    "HOTFIX_COMMIT_GENERATOR": "commit_generator",
    "HOTFIX_MERGE_DELAY": "merge_delay_seconds",
    "HOTFIX_PR_TITLE_MAX": "pr_title_max_length",
    "HOTFIX_LOG_ROOT": "log_root",
}


class HotfixSettings(BaseModel):
    """Configuration for a single hotfix run."""

    model_config = ConfigDict(frozen=True)

    trunk_branch: str = Field(default="main", min_length=1)
    remote: str = Field(default="origin", min_length=1)
    commit_generator: str = "commitologist"
    merge_delay_seconds: float = Field(default=1.0, ge=0)
    pr_title_max_length: int = Field(default=70, gt=0)
    log_root: Optional[Path] = None

    @field_validator("log_root")
    @classmethod
    def absolute_log_root(cls, value: Optional[Path]) -> Optional[Path]:
        # Log files must never land inside the working tree being released.
        if value is None:
            return None
        value = value.expanduser()
        if not value.is_absolute():
            raise ValueError(f"log root must be an absolute path or start with ~, got {value}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "HotfixSettings":
        """Build settings from ``HOTFIX_*`` environment variables.

        Unset variables fall back to the field defaults. An explicitly empty
        ``HOTFIX_COMMIT_GENERATOR`` disables the generator.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for var, field_name in SETTINGS_ENV_VARS.items():
            raw = env.get(var)
            if raw is None:
                continue
            raw = raw.strip()
            if not raw and field_name != "commit_generator":
                continue
            values[field_name] = raw
        return cls.model_validate(values)

    def with_overrides(self, **overrides: Any) -> "HotfixSettings":
        """Return a copy with the non-None overrides applied and validated."""
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return HotfixSettings.model_validate(values)

    @property
    def generator_enabled(self) -> bool:
        return bool(self.commit_generator.strip())


__all__ = [
    "HotfixSettings",
    "MergeOutcome",
    "PHASE_ORDER",
    "SETTINGS_ENV_VARS",
    "WorkflowPhase",
]
