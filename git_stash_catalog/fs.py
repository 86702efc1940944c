"""Filesystem helpers for git-stash-catalog."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"


def normalize_start(path: Path) -> Path:
    """Absolute directory to begin the search from; files map to their parent."""

    start = Path(os.path.abspath(Path(path).expanduser()))
    if start.is_file():
        start = start.parent
    return start


def find_repository_root(path: Path) -> Path | None:
    """Nearest directory at or above ``path`` that holds a ``.git`` directory."""

    try:
        start = normalize_start(path)
        for candidate in (start, *start.parents):
            if (candidate / GIT_DIR_NAME).is_dir():
                logger.info("Found Git repository at %s", candidate)
                return candidate
    except OSError as exc:
        logger.warning("Error detecting Git repository: %s", exc)
        return None
    logger.info("No Git repository found above %s", path)
    return None
