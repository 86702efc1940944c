"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class CommandRunner(Protocol):
    """Anything able to run a git command and hand back its stdout."""

    def run(self, cwd: Path, args: Iterable[str]) -> str:
        ...


class GitRunner:
    """Run git as a child process and return its standard output.

    Standard error is discarded and the exit code is only logged. Failures to
    spawn the process (missing binary, bad working directory) and timeouts
    produce an empty string, which callers treat the same as "no data".
    """

    def __init__(self, executable: str = "git", timeout: float | None = DEFAULT_TIMEOUT):
        self.executable = executable
        self.timeout = timeout

    def run(self, cwd: Path, args: Iterable[str]) -> str:
        cmd = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Git command timed out after %ss: %s", self.timeout, " ".join(cmd))
            return ""
        except OSError as exc:
            logger.warning("Git command error: %s", exc)
            return ""
        if proc.returncode != 0:
            logger.debug("Git command exited with %s: %s", proc.returncode, " ".join(cmd))
        return proc.stdout or ""


def stash_ref(index: int) -> str:
    return f"stash@{{{index}}}"


def stash_list(runner: CommandRunner, repo: Path) -> str:
    return runner.run(repo, ["stash", "list"])


def stash_epoch(runner: CommandRunner, repo: Path, index: int) -> str:
    return runner.run(repo, ["show", "-g", "--format=%at", stash_ref(index)])


def current_branch(runner: CommandRunner, repo: Path) -> str | None:
    if not repo.is_dir():
        return None
    branch = runner.run(repo, ["symbolic-ref", "--short", "HEAD"]).strip()
    return branch or None
