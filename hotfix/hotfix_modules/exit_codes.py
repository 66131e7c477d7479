"""Exit code constants for the hotfix CLI.

Exit Codes:
    0: Success
    1: Workflow failure (pre-flight check, command failure, rollback performed)
    2: Usage or configuration error
    130: Interrupted by the operator (Ctrl+C)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .orchestrator import WorkflowResult

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130  # 128 + SIGINT


def get_exit_code_description(code: int) -> str:
    """Get human-readable description for an exit code.

    Examples:
        >>> get_exit_code_description(EXIT_FAILURE)
        'Failure: Hotfix workflow failed'
        >>> get_exit_code_description(99)
        'Unknown exit code: 99'
    """
    descriptions = {
        EXIT_SUCCESS: "Success",
        EXIT_FAILURE: "Failure: Hotfix workflow failed",
        EXIT_USAGE: "Blocker: Invalid arguments or configuration",
        EXIT_INTERRUPTED: "Interrupted: Workflow cancelled by operator",
    }
    return descriptions.get(code, f"Unknown exit code: {code}")


def exit_code_for(result: "WorkflowResult") -> int:
    """Map a workflow result onto the process exit status."""

    if result.success:
        return EXIT_SUCCESS
    if result.interrupted:
        return EXIT_INTERRUPTED
    return EXIT_FAILURE


__all__ = [
    "EXIT_FAILURE",
    "EXIT_INTERRUPTED",
    "EXIT_SUCCESS",
    "EXIT_USAGE",
    "exit_code_for",
    "get_exit_code_description",
]
