"""Shared fixtures: a recording stand-in for ``subprocess.run``."""

from __future__ import annotations

import logging
import subprocess

import pytest

from hotfix.hotfix_modules.data_types import HotfixSettings
from hotfix.hotfix_tests.fakes import FakeShell


@pytest.fixture
def shell(monkeypatch: pytest.MonkeyPatch) -> FakeShell:
    fake = FakeShell()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def happy_shell(shell: FakeShell) -> FakeShell:
    """A trunk checkout with two pending edits and a working generator."""
    shell.respond("git", "rev-parse", "--git-dir", stdout=".git\n")
    shell.respond("gh", "auth", "status", stdout="Logged in to github.com\n")
    shell.respond("git", "branch", "--show-current", stdout="main\n")
    shell.respond("git", "status", "--porcelain", stdout=" M src/app.py\n M README.md\n")
    shell.respond("commitologist", stdout="Fix typo\n")
    shell.respond("gh", "pr", "create", stdout="https://github.com/acme/widgets/pull/42\n")
    return shell


@pytest.fixture
def settings() -> HotfixSettings:
    return HotfixSettings(merge_delay_seconds=0)


@pytest.fixture
def logger() -> logging.Logger:
    test_logger = logging.getLogger("hotfix_test")
    test_logger.setLevel(logging.DEBUG)
    return test_logger
