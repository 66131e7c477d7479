"""Commit message resolution: external generator, fallback template, operator edit."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from . import executor
from .data_types import HotfixSettings
from .executor import CommandError
from .utils import human_timestamp

FALLBACK_TEMPLATE = "Hotfix: automated fix ({timestamp})"

Prompt = Callable[[str], str]


def fallback_commit_message(moment: datetime) -> str:
    """Return the timestamped message used when no generator output is available."""

    return FALLBACK_TEMPLATE.format(timestamp=human_timestamp(moment))


def generate_commit_message(settings: HotfixSettings, logger: logging.Logger) -> Optional[str]:
    """Ask the configured generator for a message.

    Returns None when the generator is disabled, missing, fails, or prints
    nothing. None of those are errors for the workflow.
    """
    if not settings.generator_enabled:
        logger.debug("Commit message generator disabled")
        return None

    try:
        message = executor.execute_command([settings.commit_generator]).strip()
    except CommandError as exc:
        logger.debug(f"Commit message generator unavailable: {exc.message}")
        return None

    if not message:
        logger.debug(f"Empty commit message from {settings.commit_generator}")
        return None
    return message


def confirm_commit_message(message: str, prompt: Prompt) -> str:
    """Show ``message`` and let the operator replace it.

    An empty answer, or closed input, keeps ``message``.
    """
    try:
        answer = prompt(f"📝 Commit message: {message}\n✏️ Edit if needed (or press Enter to continue): ")
    except EOFError:
        return message
    return answer.strip() or message


def resolve_commit_message(
    settings: HotfixSettings,
    logger: logging.Logger,
    prompt: Prompt,
    now: datetime,
) -> str:
    logger.info("📝 Generating commit message...")

    message = generate_commit_message(settings, logger)
    if message:
        logger.info(f"✅ Generated smart commit message from {settings.commit_generator}")
    else:
        message = fallback_commit_message(now)
        logger.info("✅ Using fallback commit message")

    message = confirm_commit_message(message, prompt)
    logger.info(f'✅ Final commit message: "{message}"')
    return message


__all__ = [
    "FALLBACK_TEMPLATE",
    "Prompt",
    "confirm_commit_message",
    "fallback_commit_message",
    "generate_commit_message",
    "resolve_commit_message",
]
