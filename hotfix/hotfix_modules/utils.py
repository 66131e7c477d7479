"""Shared utilities for hotfix workflows."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

PROJECT_NAME = "hotfix"

DEFAULT_HOTFIX_ENV_FILENAMES = (
    ".env.hotfix",
    ".env.hotfix.local",
)

HUMAN_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_env_path(path: Path) -> Path:
    """Resolve environment file paths relative to the current directory."""

    if path.is_absolute():
        return path
    return Path.cwd() / path


def load_hotfix_env() -> None:
    """Load hotfix dotenv files, later files taking precedence over earlier ones."""

    override = os.getenv("HOTFIX_ENV_FILE", "").strip()
    if override:
        candidates = [
            _resolve_env_path(Path(entry.strip()).expanduser())
            for entry in override.split(os.pathsep)
            if entry.strip()
        ]
    else:
        candidates = [_resolve_env_path(Path(name)) for name in DEFAULT_HOTFIX_ENV_FILENAMES]

    for env_path in candidates:
        if env_path.is_file():
            load_dotenv(env_path, override=True)


def logs_root(override: Path | None = None) -> Path:
    """Root directory where run logs are written.

    Defaults to a directory under the user's home so log files never show up as
    pending changes in the repository being released.
    """

    if override is not None:
        return override
    return Path.home() / f".{PROJECT_NAME}" / "logs"


def run_logs_dir(run_id: str, log_root: Path | None = None) -> Path:
    """Return the directory for logs tied to a single run."""

    return logs_root(log_root) / run_id


def make_run_id() -> str:
    """Generate an 8-character run identifier."""

    return str(uuid.uuid4())[:8]


def human_timestamp(moment: datetime) -> str:
    """Format a datetime in local time for commit messages and PR bodies."""

    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime(HUMAN_TIMESTAMP_FORMAT)


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def setup_logger(run_id: str, log_root: Path | None = None) -> logging.Logger:
    """Configure a run logger writing progress to the terminal and detail to a log file.

    INFO lines go to stdout, warnings and errors to stderr, and everything from
    DEBUG up is appended to ``<log root>/<run id>/execution.log``.
    """

    log_dir = run_logs_dir(run_id, log_root)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "execution.log"

    logger = logging.getLogger(f"{PROJECT_NAME}_{run_id}")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.addHandler(error_handler)
    logger.debug(f"Hotfix logger initialized - ID: {run_id}")
    logger.debug(f"Log file: {log_file}")

    return logger


__all__ = [
    "DEFAULT_HOTFIX_ENV_FILENAMES",
    "HUMAN_TIMESTAMP_FORMAT",
    "PROJECT_NAME",
    "human_timestamp",
    "load_hotfix_env",
    "logs_root",
    "make_run_id",
    "run_logs_dir",
    "setup_logger",
]
