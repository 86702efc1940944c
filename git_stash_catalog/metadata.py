"""Custom stash names kept outside of git.

Only the lookup contract exists today. Names are meant to live in a JSON
sidecar inside the repository's ``.git/info`` directory, keyed by stash index.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

METADATA_FILENAME = "stash-catalog.json"


class MetadataStore(Protocol):
    def load_custom_name(self, repo: Path, index: int) -> str:
        ...


class NullMetadataStore:
    """Store used until the sidecar file is supported; knows no names."""

    def load_custom_name(self, repo: Path, index: int) -> str:
        return ""


def metadata_path(repo: Path) -> Path:
    return repo / ".git" / "info" / METADATA_FILENAME
