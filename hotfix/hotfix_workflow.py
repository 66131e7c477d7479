"""Command-line entrypoint for the automated hotfix workflow.

Run ``hotfix`` from a clean checkout of the trunk branch that has pending
changes. The tool branches, commits, pushes, opens and merges a pull request,
then returns to an up-to-date trunk.

Configuration comes from ``HOTFIX_*`` environment variables (optionally loaded
from ``.env.hotfix`` / ``.env.hotfix.local`` or the files listed in
``HOTFIX_ENV_FILE``), overridden per run by the command-line options.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from hotfix import __version__
from hotfix.hotfix_modules.data_types import HotfixSettings
from hotfix.hotfix_modules.exit_codes import EXIT_USAGE, exit_code_for, get_exit_code_description
from hotfix.hotfix_modules.orchestrator import WorkflowResult, run_hotfix_workflow
from hotfix.hotfix_modules.utils import load_hotfix_env, make_run_id, run_logs_dir, setup_logger

console = Console()
err_console = Console(stderr=True)


def print_status_panel(action: str, run_id: str, status: str = "info", target: Console = console) -> None:
    """Print timestamped status panel."""
    timestamp = datetime.now().strftime("%H:%M:%S")
    icon = {"success": "✅", "error": "❌", "info": "🔄"}.get(status, "ℹ️")
    border_style = {"success": "green", "error": "red", "info": "cyan"}.get(status, "blue")

    title = f"[{timestamp}] | {run_id} | hotfix"

    target.print(
        Panel(
            f"{icon} {escape(action)}",
            title=f"[bold {border_style}]{title}[/bold {border_style}]",
            border_style=border_style,
            padding=(0, 1),
        )
    )


def summarize(result: WorkflowResult) -> str:
    if result.success:
        lines = [f"Hotfix merged ({result.merge_outcome.value if result.merge_outcome else 'unknown'})"]
        if result.pr_url:
            lines.append(f"Pull request: {result.pr_url}")
        return "\n".join(lines)

    phase = result.failed_phase.value if result.failed_phase else "unknown"
    lines = [f"Hotfix failed during {phase}: {result.error_message}"]
    if result.branch_name and result.failed_phase and result.failed_phase.mutating:
        outcome = "restored original branch" if result.rolled_back else "rollback incomplete, check the working tree"
        lines.append(f"Rollback: {outcome}")
    return "\n".join(lines)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name="hotfix", message="%(version)s")
@click.option("--trunk", "trunk_branch", default=None, help="Trunk branch to branch from and merge into (default: main).")
@click.option("--remote", default=None, help="Git remote to push to and pull from (default: origin).")
@click.option("--generator", "commit_generator", default=None, help="Commit message generator command; empty string disables it.")
@click.option("--merge-delay", "merge_delay_seconds", type=float, default=None, help="Seconds to wait before merging (default: 1.0).")
def main(
    trunk_branch: Optional[str],
    remote: Optional[str],
    commit_generator: Optional[str],
    merge_delay_seconds: Optional[float],
) -> None:
    """hotfix - Automated hotfix workflow for GitHub.

    Creates branch, commits changes, creates PR, and merges automatically.
    """
    load_hotfix_env()
    try:
        settings = HotfixSettings.from_env().with_overrides(
            trunk_branch=trunk_branch,
            remote=remote,
            commit_generator=commit_generator,
            merge_delay_seconds=merge_delay_seconds,
        )
    except ValidationError as exc:
        err_console.print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}")
        sys.exit(EXIT_USAGE)

    run_id = make_run_id()
    logger = setup_logger(run_id, log_root=settings.log_root)
    print_status_panel(f"Hotfix from {settings.trunk_branch} via {settings.remote}", run_id, "info")

    result = run_hotfix_workflow(settings, logger, run_id=run_id)
    code = exit_code_for(result)

    if result.success:
        print_status_panel(summarize(result), run_id, "success")
    else:
        print_status_panel(summarize(result), run_id, "error", target=err_console)
        log_file = run_logs_dir(run_id, settings.log_root) / "execution.log"
        err_console.print(f"[dim]{get_exit_code_description(code)} - log: {log_file}[/dim]")

    sys.exit(code)


if __name__ == "__main__":
    main()
