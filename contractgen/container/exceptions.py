class ContainerError(Exception):
    """Base exception for all template container errors."""


class InputRejectedError(ContainerError):
    """Raised when a template is unsupported, oversized or unreadable."""


class RepackagingError(ContainerError):
    """Raised when rewritten content cannot be written back into a container."""
