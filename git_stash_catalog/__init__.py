"""Top-level package for git-stash-catalog."""

from importlib.metadata import PackageNotFoundError, version

from .catalog import StashCatalogService, build_catalog
from .models import CatalogResult, CatalogStatus, RepoContext, StashRecord

try:  # pragma: no cover - best effort metadata lookup
    __version__ = version("git-stash-catalog")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "CatalogResult",
    "CatalogStatus",
    "RepoContext",
    "StashCatalogService",
    "StashRecord",
    "__version__",
    "build_catalog",
]
