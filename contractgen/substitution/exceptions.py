class SubstitutionError(Exception):
    """Raised when content rewriting fails for a reason other than a missing match."""
