"""Synchronous external command execution for hotfix workflows."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(f"Command failed: {command}\n{message}")
        self.command = command
        self.message = message


def format_command(args: Sequence[str]) -> str:
    """Render an argument vector as a copy-pasteable shell command line."""

    return shlex.join(str(arg) for arg in args)


def execute_command(args: Sequence[str], cwd: Path | None = None) -> str:
    """Run a command to completion and return its captured stdout.

    The output is returned untrimmed; callers strip it when they need a single
    value. Commands are never retried.

    Raises:
        CommandError: The command exited non-zero or the executable was not found.
    """
    argv = [str(arg) for arg in args]
    command = format_command(argv)
    logger.debug(f"Executing: {command}")

    try:
        result = subprocess.run(argv, capture_output=True, encoding="utf-8", cwd=cwd)
    except FileNotFoundError as exc:
        raise CommandError(command, f"executable not found: {argv[0]}") from exc
    except OSError as exc:
        raise CommandError(command, str(exc)) from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        stdout = (result.stdout or "").strip()
        message = stderr or stdout or f"exited with status {result.returncode}"
        logger.debug(f"Command exited {result.returncode}: {command}")
        raise CommandError(command, message)

    return result.stdout or ""


__all__ = ["CommandError", "execute_command", "format_command"]
