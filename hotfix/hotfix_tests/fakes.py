"""Test doubles for external commands and terminal input."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

MUTATING_PREFIXES = (
    ("git", "checkout"),
    ("git", "add"),
    ("git", "commit"),
    ("git", "push"),
    ("git", "pull"),
    ("git", "branch", "-D"),
    ("gh", "pr", "create"),
    ("gh", "pr", "merge"),
)

FIXED_NOW = datetime(2025, 7, 30, 14, 30, 45, tzinfo=timezone.utc)


@dataclass
class _Response:
    prefix: tuple[str, ...]
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    missing: bool = False


class FakeShell:
    """Records every command and answers from registered responses.

    Responses match on a command prefix; the most recently registered match
    wins. Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self._responses: List[_Response] = []

    def respond(self, *prefix: str, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self._responses.insert(0, _Response(prefix, stdout, stderr, returncode))

    def fail(self, *prefix: str, stderr: str = "boom") -> None:
        self.respond(*prefix, stderr=stderr, returncode=1)

    def missing(self, *prefix: str) -> None:
        self._responses.insert(0, _Response(prefix, missing=True))

    def __call__(self, args: Iterable[str], **kwargs) -> subprocess.CompletedProcess:
        argv = list(args)
        self.calls.append(argv)
        response = self._match(argv)
        if response is None:
            return subprocess.CompletedProcess(argv, 0, "", "")
        if response.missing:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        return subprocess.CompletedProcess(argv, response.returncode, response.stdout, response.stderr)

    def _match(self, argv: List[str]) -> Optional[_Response]:
        for response in self._responses:
            if tuple(argv[: len(response.prefix)]) == response.prefix:
                return response
        return None

    def ran(self, *prefix: str) -> bool:
        return any(tuple(call[: len(prefix)]) == prefix for call in self.calls)

    def index_of(self, *prefix: str) -> int:
        for index, call in enumerate(self.calls):
            if tuple(call[: len(prefix)]) == prefix:
                return index
        raise AssertionError(f"{prefix} was never run; calls: {self.calls}")

    def mutating_calls(self) -> List[List[str]]:
        return [
            call
            for call in self.calls
            if any(tuple(call[: len(prefix)]) == prefix for prefix in MUTATING_PREFIXES)
        ]


class ScriptedPrompt:
    """Answers prompts from a list; raises EOFError once the answers run out."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, text: str) -> str:
        self.prompts.append(text)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)
