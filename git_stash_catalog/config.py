"""Load runtime settings from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from .exceptions import ValidationError
from .git import DEFAULT_TIMEOUT
from .models import WipMode

ENV_GIT = "GIT_STASH_CATALOG_GIT"
ENV_TIMEOUT = "GIT_STASH_CATALOG_TIMEOUT"
ENV_WORKERS = "GIT_STASH_CATALOG_WORKERS"
ENV_WIP_MODE = "GIT_STASH_CATALOG_WIP_MODE"


@dataclass(frozen=True)
class Settings:
    git_executable: str = "git"
    timeout: float | None = DEFAULT_TIMEOUT
    workers: int = 1
    wip_mode: WipMode = WipMode.DESCRIPTION

    def override(
        self,
        *,
        timeout: float | None = None,
        workers: int | None = None,
        wip_mode: str | None = None,
    ) -> "Settings":
        """Return a copy with CLI-supplied values applied on top."""

        settings = self
        if timeout is not None:
            settings = replace(settings, timeout=parse_timeout(str(timeout), "--timeout"))
        if workers is not None:
            settings = replace(settings, workers=parse_workers(str(workers), "--workers"))
        if wip_mode is not None:
            settings = replace(settings, wip_mode=parse_wip_mode(wip_mode, "--wip-mode"))
        return settings


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    defaults = Settings()
    git_executable = env.get(ENV_GIT, "").strip() or defaults.git_executable
    timeout = defaults.timeout
    if env.get(ENV_TIMEOUT):
        timeout = parse_timeout(env[ENV_TIMEOUT], ENV_TIMEOUT)
    workers = defaults.workers
    if env.get(ENV_WORKERS):
        workers = parse_workers(env[ENV_WORKERS], ENV_WORKERS)
    wip_mode = defaults.wip_mode
    if env.get(ENV_WIP_MODE):
        wip_mode = parse_wip_mode(env[ENV_WIP_MODE], ENV_WIP_MODE)
    return Settings(
        git_executable=git_executable,
        timeout=timeout,
        workers=workers,
        wip_mode=wip_mode,
    )


def parse_timeout(raw: str, source: str) -> float | None:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(f"{source} must be a number of seconds, got {raw!r}.") from exc
    if value < 0:
        raise ValidationError(f"{source} cannot be negative.")
    # 0 disables the timeout
    return value or None


def parse_workers(raw: str, source: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"{source} must be an integer, got {raw!r}.") from exc
    if value < 1:
        raise ValidationError(f"{source} must be at least 1.")
    return value


def parse_wip_mode(raw: str, source: str) -> WipMode:
    try:
        return WipMode(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in WipMode)
        raise ValidationError(f"{source} must be one of: {choices}.") from exc
