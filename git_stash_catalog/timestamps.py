"""Resolve stash creation times from ``git show``."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from .git import CommandRunner, stash_epoch

logger = logging.getLogger(__name__)


def parse_epoch(text: str) -> datetime | None:
    """Read the first line of ``text`` as Unix seconds and convert to local time."""

    lines = text.splitlines()
    if not lines:
        return None
    first = lines[0].strip()
    try:
        return datetime.fromtimestamp(int(first))
    except (ValueError, OverflowError, OSError):
        return None


def resolve_created_at(
    runner: CommandRunner,
    repo: Path,
    index: int,
    *,
    now: Callable[[], datetime] = datetime.now,
) -> datetime:
    """Best-effort creation time for ``stash@{index}``; falls back to ``now()``."""

    try:
        output = stash_epoch(runner, repo, index)
    except Exception as exc:
        logger.warning("Error getting stash date for stash@{%s}: %s", index, exc)
        return now()
    created = parse_epoch(output)
    if created is None:
        logger.debug("No usable timestamp for stash@{%s}, using current time", index)
        return now()
    return created
