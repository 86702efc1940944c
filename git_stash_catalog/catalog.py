"""High-level orchestration for building the stash catalog."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Callable

from . import git
from .config import Settings, load_settings
from .exceptions import RefreshCancelled, ValidationError
from .fs import find_repository_root
from .metadata import MetadataStore, NullMetadataStore
from .models import CatalogResult, CatalogStatus, RepoContext, StashRecord, WipMode
from .parser import parse_stash_list
from .timestamps import resolve_created_at

logger = logging.getLogger(__name__)

NO_REPOSITORY_MESSAGE = "No Git repository found. Please open a Git repository."
NO_STASHES_MESSAGE = "No stashes found in this repository."
CANCELLED_MESSAGE = "Stash refresh cancelled."


@dataclass
class StashCatalogService:
    runner: git.CommandRunner
    metadata: MetadataStore = field(default_factory=NullMetadataStore)
    wip_mode: WipMode = WipMode.DESCRIPTION
    workers: int = 1
    now: Callable[[], datetime] = datetime.now

    @classmethod
    def from_settings(cls, settings: Settings, metadata: MetadataStore | None = None) -> "StashCatalogService":
        runner = git.GitRunner(settings.git_executable, timeout=settings.timeout)
        return cls(
            runner=runner,
            metadata=metadata or NullMetadataStore(),
            wip_mode=settings.wip_mode,
            workers=settings.workers,
        )

    def locate(self, start: Path, cancel: threading.Event | None = None) -> RepoContext | None:
        _checkpoint(cancel, "repository lookup")
        repo_path = find_repository_root(start)
        if repo_path is None:
            return None
        _checkpoint(cancel, "branch lookup")
        return RepoContext(repo_path=repo_path, current_branch=git.current_branch(self.runner, repo_path))

    def list_stashes(self, repo: Path, cancel: threading.Event | None = None) -> list[StashRecord]:
        stashes: list[StashRecord] = []
        self._collect(repo, cancel, stashes)
        return stashes

    def build_catalog(self, start: Path, cancel: threading.Event | None = None) -> CatalogResult:
        """Locate the repository above ``start`` and list its stashes.

        Never raises. Missing repositories, empty stash lists, cancellation and
        unexpected failures are reported through ``CatalogResult.message``
        along with whatever records were enriched before the refresh stopped.
        """

        stashes: list[StashRecord] = []
        repo_path: Path | None = None
        branch: str | None = None
        try:
            context = self.locate(start, cancel)
            if context is None:
                return CatalogResult((), None, None, NO_REPOSITORY_MESSAGE, CatalogStatus.NO_REPOSITORY)
            repo_path = context.repo_path
            branch = context.current_branch
            self._collect(repo_path, cancel, stashes)
        except RefreshCancelled as exc:
            logger.info("%s", exc)
            return CatalogResult(tuple(stashes), repo_path, branch, CANCELLED_MESSAGE, CatalogStatus.CANCELLED)
        except Exception as exc:
            logger.exception("Error refreshing stashes for %s", start)
            return CatalogResult(
                tuple(stashes),
                repo_path,
                branch,
                f"Error refreshing stashes: {exc}",
                CatalogStatus.ERROR,
            )
        if not stashes:
            return CatalogResult((), repo_path, branch, NO_STASHES_MESSAGE, CatalogStatus.EMPTY)
        return CatalogResult(tuple(stashes), repo_path, branch, None, CatalogStatus.OK)

    def _collect(self, repo: Path, cancel: threading.Event | None, out: list[StashRecord]) -> None:
        _checkpoint(cancel, "stash list")
        records = parse_stash_list(git.stash_list(self.runner, repo), self.wip_mode)
        logger.debug("Parsed %d stash entries in %s", len(records), repo)
        if self.workers <= 1 or len(records) <= 1:
            for record in records:
                out.append(self._enrich(repo, record, cancel))
            return
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for enriched in pool.map(lambda record: self._enrich(repo, record, cancel), records):
                out.append(enriched)

    def _enrich(self, repo: Path, record: StashRecord, cancel: threading.Event | None) -> StashRecord:
        _checkpoint(cancel, f"resolving {record.name}")
        created_at = resolve_created_at(self.runner, repo, record.index, now=self.now)
        return replace(
            record,
            created_at=created_at,
            custom_name=self._custom_name(repo, record.index),
        )

    def _custom_name(self, repo: Path, index: int) -> str:
        try:
            return self.metadata.load_custom_name(repo, index) or ""
        except Exception as exc:
            logger.warning("Error loading stash metadata for stash@{%s}: %s", index, exc)
            return ""


def build_catalog(
    start: Path,
    cancel: threading.Event | None = None,
    settings: Settings | None = None,
) -> CatalogResult:
    if settings is None:
        try:
            settings = load_settings()
        except ValidationError as exc:
            return CatalogResult((), None, None, f"Error refreshing stashes: {exc}", CatalogStatus.ERROR)
    service = StashCatalogService.from_settings(settings)
    return service.build_catalog(start, cancel)


def _checkpoint(cancel: threading.Event | None, stage: str) -> None:
    if cancel is not None and cancel.is_set():
        raise RefreshCancelled(stage)
