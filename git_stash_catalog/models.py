"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class WipMode(str, Enum):
    """How a stash is recognised as an auto-generated ``WIP on`` entry."""

    DESCRIPTION = "description"
    MESSAGE = "message"


class CatalogStatus(str, Enum):
    OK = "ok"
    NO_REPOSITORY = "no-repository"
    EMPTY = "empty"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StashRecord:
    """A single entry reported by ``git stash list``."""

    index: int
    name: str
    message: str
    branch_name: str = ""
    is_work_in_progress: bool = False
    custom_name: str = ""
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.custom_name or self.message


@dataclass(frozen=True)
class RepoContext:
    """Repository location resolved for one refresh."""

    repo_path: Path
    current_branch: str | None = None


@dataclass(frozen=True)
class CatalogResult:
    """Outcome of a catalog build, handed to whatever displays it."""

    stashes: tuple[StashRecord, ...]
    repo_path: Path | None
    current_branch: str | None
    message: str | None
    status: CatalogStatus

    @property
    def is_error(self) -> bool:
        return self.status is CatalogStatus.ERROR

    def find(self, index: int) -> StashRecord | None:
        for stash in self.stashes:
            if stash.index == index:
                return stash
        return None
