"""Custom exception hierarchy for git-stash-catalog."""


class StashCatalogError(Exception):
    """Base error for all custom exceptions."""


class ValidationError(StashCatalogError):
    """Raised when configuration or user input is invalid."""


class RefreshCancelled(StashCatalogError):
    """Raised when the caller cancels a catalog refresh."""

    def __init__(self, stage: str | None = None):
        message = "Stash refresh cancelled"
        if stage:
            message = f"Stash refresh cancelled before {stage}"
        super().__init__(message)
        self.stage = stage
