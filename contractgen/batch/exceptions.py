class BatchError(Exception):
    """Base exception for batch generation errors."""


class ArchiveError(BatchError):
    """Raised when the combined output archive cannot be built."""


class RunFailureError(BatchError):
    """Raised when a whole batch run fails and no archive can be returned."""
