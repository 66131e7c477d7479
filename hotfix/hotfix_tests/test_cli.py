"""Tests for the ``hotfix`` command-line entrypoint."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from hotfix import hotfix_workflow
from hotfix.hotfix_modules.data_types import SETTINGS_ENV_VARS, MergeOutcome, WorkflowPhase
from hotfix.hotfix_modules.orchestrator import WorkflowResult


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("HOTFIX_ENV_FILE", raising=False)
    monkeypatch.setenv("HOTFIX_LOG_ROOT", str(tmp_path / "logs"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def captured_runs(monkeypatch: pytest.MonkeyPatch):
    """Replace the workflow with a stub returning a queued result."""
    calls = []
    results = []

    def fake_run(settings, logger, run_id=None):
        calls.append(settings)
        return results.pop(0)

    monkeypatch.setattr(hotfix_workflow, "run_hotfix_workflow", fake_run)
    return calls, results


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help(flag):
    result = CliRunner().invoke(hotfix_workflow.main, [flag])

    assert result.exit_code == 0
    assert "Automated hotfix workflow" in result.output
    assert "--merge-delay" in result.output


@pytest.mark.parametrize("flag", ["-v", "--version"])
def test_version(flag):
    result = CliRunner().invoke(hotfix_workflow.main, [flag])

    assert result.exit_code == 0
    assert result.output.strip() == "1.0.3"


def test_success_exits_zero(isolated_env, captured_runs):
    calls, results = captured_runs
    results.append(
        WorkflowResult(
            success=True,
            run_id="abc",
            branch_name="hotfix-2025-07-30-14-30-45",
            pr_url="https://github.com/acme/widgets/pull/42",
            merge_outcome=MergeOutcome.AUTOMATIC,
        )
    )

    result = CliRunner().invoke(hotfix_workflow.main, [])

    assert result.exit_code == 0
    assert "Hotfix merged (automatic)" in result.output
    assert calls[0].trunk_branch == "main"
    assert list((isolated_env / "logs").iterdir())


def test_options_override_environment(isolated_env, captured_runs, monkeypatch: pytest.MonkeyPatch):
    calls, results = captured_runs
    results.append(WorkflowResult(success=True, run_id="abc", merge_outcome=MergeOutcome.MANUAL))
    monkeypatch.setenv("HOTFIX_TRUNK_BRANCH", "develop")
    monkeypatch.setenv("HOTFIX_REMOTE", "upstream")

    result = CliRunner().invoke(
        hotfix_workflow.main,
        ["--trunk", "release", "--generator", "", "--merge-delay", "0"],
    )

    assert result.exit_code == 0
    settings = calls[0]
    assert settings.trunk_branch == "release"
    assert settings.remote == "upstream"
    assert settings.generator_enabled is False
    assert settings.merge_delay_seconds == 0


def test_dotenv_file_is_loaded(isolated_env, captured_runs, monkeypatch: pytest.MonkeyPatch):
    calls, results = captured_runs
    results.append(WorkflowResult(success=True, run_id="abc", merge_outcome=MergeOutcome.AUTOMATIC))
    (isolated_env / ".env.hotfix").write_text("HOTFIX_REMOTE=fork\n")
    monkeypatch.setenv("HOTFIX_REMOTE", "placeholder")

    result = CliRunner().invoke(hotfix_workflow.main, [])

    assert result.exit_code == 0
    assert calls[0].remote == "fork"


def test_failure_exits_one(isolated_env, captured_runs):
    _, results = captured_runs
    results.append(
        WorkflowResult(
            success=False,
            run_id="abc",
            failed_phase=WorkflowPhase.PUSH,
            error_message="remote rejected",
            rolled_back=True,
            branch_name="hotfix-2025-07-30-14-30-45",
        )
    )

    result = CliRunner().invoke(hotfix_workflow.main, [])

    assert result.exit_code == 1
    assert "Hotfix failed during push" in result.output
    assert "restored original branch" in result.output


def test_interrupt_exits_130(isolated_env, captured_runs):
    _, results = captured_runs
    results.append(
        WorkflowResult(
            success=False,
            run_id="abc",
            failed_phase=WorkflowPhase.COMMIT_MESSAGE,
            error_message="Interrupted by user",
            interrupted=True,
        )
    )

    result = CliRunner().invoke(hotfix_workflow.main, [])

    assert result.exit_code == 130


def test_invalid_configuration_exits_two(isolated_env, captured_runs):
    calls, _ = captured_runs

    result = CliRunner().invoke(hotfix_workflow.main, ["--merge-delay", "-1"])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output
    assert calls == []
