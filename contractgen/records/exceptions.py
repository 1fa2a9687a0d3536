class RecordValidationError(Exception):
    """Raised when a replacement record or record manifest is invalid."""
