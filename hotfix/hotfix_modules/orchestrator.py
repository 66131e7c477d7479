"""Hotfix workflow orchestrator.

Runs the fixed phase sequence against a single working tree:

    validate -> commit_message -> branch_name -> create_branch -> commit ->
    push -> create_pr -> merge -> cleanup

Pre-flight phases (validate, commit_message, branch_name) never touch the
repository. Once ``create_branch`` is reached, any failure, including an
operator interrupt (Ctrl+C), triggers a single compensating rollback: switch
back to the original branch and force-delete the generated local branch.
Rollback problems are logged and never replace the error that caused them.

An automatic merge that GitHub rejects is not a failure: the merge phase
degrades to a manual merge and the run continues with cleanup.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from rich.console import Console

from . import workflow_ops
from .commit_message import Prompt, resolve_commit_message
from .data_types import HotfixSettings, MergeOutcome, WorkflowPhase
from .state import WorkflowState
from .utils import make_run_id
from .validation import validate_environment


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def terminal_prompt(text: str) -> str:
    """Block for one line of operator input; raises EOFError when stdin is closed."""
    # Show commit messages verbatim: no rich markup, no :emoji: codes.
    return Console().input(text, markup=False, emoji=False)


@dataclass
class WorkflowResult:
    """Result of a complete hotfix run.

    Attributes:
        success: Whether the workflow completed successfully
        run_id: Identifier of the run (names the log directory)
        completed_phases: Phases that finished, in order
        failed_phase: Phase that was running when the run failed
        error_message: Error message if the run failed
        rolled_back: Whether rollback ran and restored the original branch
        interrupted: Whether the operator interrupted the run
    """
    success: bool
    run_id: str
    completed_phases: List[WorkflowPhase] = field(default_factory=list)
    failed_phase: Optional[WorkflowPhase] = None
    error_message: Optional[str] = None
    rolled_back: bool = False
    interrupted: bool = False
    branch_name: Optional[str] = None
    pr_url: Optional[str] = None
    merge_outcome: Optional[MergeOutcome] = None


class HotfixWorkflow:
    """Owns the run state and drives the phases in order."""

    def __init__(
        self,
        settings: HotfixSettings,
        logger: logging.Logger,
        run_id: Optional[str] = None,
        prompt: Optional[Prompt] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.state = WorkflowState(run_id=run_id or make_run_id())
        self.prompt = prompt or terminal_prompt
        self.sleep = sleep
        self.clock = clock
        self.completed_phases: List[WorkflowPhase] = []

    def run(self) -> WorkflowResult:
        self.logger.info("🚀 Starting automated hotfix workflow...")
        try:
            self._run_phases()
        except KeyboardInterrupt:
            self.logger.error("❌ Hotfix workflow interrupted")
            return self._fail("Interrupted by operator", interrupted=True)
        except Exception as exc:
            self.logger.error(f"❌ Hotfix workflow failed: {exc}")
            self.logger.debug("Failure details", exc_info=True)
            return self._fail(str(exc))

        self.logger.debug(f"Final state: {self.state.to_dict()}")
        self.logger.info("✅ Hotfix workflow completed successfully!")
        return self._result(success=True)

    def _enter(self, phase: WorkflowPhase) -> None:
        if self.state.phase is not phase:
            self.completed_phases.append(self.state.phase)
        self.state.advance(phase)
        self.logger.debug(f"Phase: {phase.value}")

    def _run_phases(self) -> None:
        state = self.state
        settings = self.settings

        self._enter(WorkflowPhase.VALIDATE)
        validate_environment(state, settings, self.logger)

        self._enter(WorkflowPhase.COMMIT_MESSAGE)
        state.commit_message = resolve_commit_message(settings, self.logger, self.prompt, self.clock())

        self._enter(WorkflowPhase.BRANCH_NAME)
        state.branch_name = workflow_ops.generate_branch_name(self.clock())
        self.logger.info(f"📝 Generated branch name: {state.branch_name}")

        self._enter(WorkflowPhase.CREATE_BRANCH)
        workflow_ops.create_and_switch_branch(state, self.logger)

        self._enter(WorkflowPhase.COMMIT)
        workflow_ops.commit_changes(state, self.logger)

        self._enter(WorkflowPhase.PUSH)
        workflow_ops.push_branch(state, settings, self.logger)

        self._enter(WorkflowPhase.CREATE_PR)
        workflow_ops.create_pull_request(state, settings, self.logger, self.clock())

        self._enter(WorkflowPhase.MERGE)
        state.merge_outcome = workflow_ops.merge_pull_request(
            state, settings, self.logger, self.prompt, self.sleep
        )

        self._enter(WorkflowPhase.CLEANUP)
        workflow_ops.cleanup(state, settings, self.logger)

        self._enter(WorkflowPhase.COMPLETE)

    def _fail(self, message: str, interrupted: bool = False) -> WorkflowResult:
        failed_phase = self.state.phase
        self.logger.debug(f"State at failure: {self.state.to_dict()}")
        rolled_back = False
        if self.state.needs_rollback:
            try:
                rolled_back = workflow_ops.rollback(self.state, self.logger)
            except KeyboardInterrupt:
                self.logger.error("⚠️ Rollback interrupted")
        else:
            self.logger.debug(f"No rollback needed after {failed_phase.value}")
        return self._result(
            success=False,
            failed_phase=failed_phase,
            error_message=message,
            rolled_back=rolled_back,
            interrupted=interrupted,
        )

    def _result(self, success: bool, **kwargs) -> WorkflowResult:
        return WorkflowResult(
            success=success,
            run_id=self.state.run_id,
            completed_phases=list(self.completed_phases),
            branch_name=self.state.branch_name,
            pr_url=self.state.pr_url,
            merge_outcome=self.state.merge_outcome,
            **kwargs,
        )


def run_hotfix_workflow(settings: HotfixSettings, logger: logging.Logger, run_id: Optional[str] = None) -> WorkflowResult:
    """Run the full hotfix workflow with interactive terminal input."""

    return HotfixWorkflow(settings, logger, run_id=run_id).run()


__all__ = ["HotfixWorkflow", "WorkflowResult", "run_hotfix_workflow", "terminal_prompt"]
