"""Tests for the command executor."""

from __future__ import annotations

import sys

import pytest

from hotfix.hotfix_modules.executor import CommandError, execute_command, format_command
from hotfix.hotfix_tests.fakes import FakeShell


def test_execute_command_returns_untrimmed_stdout():
    output = execute_command([sys.executable, "-c", "print('  hello  ')"])
    assert output == "  hello  \n"


def test_execute_command_raises_on_nonzero_exit():
    script = "import sys; sys.stderr.write('bad things\\n'); sys.exit(3)"
    with pytest.raises(CommandError) as excinfo:
        execute_command([sys.executable, "-c", script])

    assert excinfo.value.message == "bad things"
    assert sys.executable in excinfo.value.command
    assert str(excinfo.value).startswith("Command failed: ")


def test_execute_command_missing_executable():
    with pytest.raises(CommandError) as excinfo:
        execute_command(["definitely-not-a-real-hotfix-binary"])

    assert "executable not found" in excinfo.value.message
    assert excinfo.value.command == "definitely-not-a-real-hotfix-binary"


def test_execute_command_falls_back_to_stdout_then_status(shell: FakeShell):
    shell.respond("tool", "a", stdout="only stdout\n", returncode=1)
    shell.respond("tool", "b", returncode=4)

    with pytest.raises(CommandError) as first:
        execute_command(["tool", "a"])
    with pytest.raises(CommandError) as second:
        execute_command(["tool", "b"])

    assert first.value.message == "only stdout"
    assert second.value.message == "exited with status 4"


def test_execute_command_passes_arguments_without_shell(shell: FakeShell):
    execute_command(["git", "commit", "-m", 'Fix "quoted" message; rm -rf /'])

    assert shell.calls == [["git", "commit", "-m", 'Fix "quoted" message; rm -rf /']]


def test_format_command_quotes_arguments():
    assert format_command(["git", "commit", "-m", "Fix typo"]) == "git commit -m 'Fix typo'"
