"""
Errors raised while managing a sandbox directory.
"""


class SandboxError(Exception):
    """Base class for sandbox failures. ``error`` holds the underlying cause."""

    message = "Sandbox operation failed"

    def __init__(self, error: BaseException):
        self.error = error
        super().__init__(f"{self.message} with error: {error}")


class CreationError(SandboxError):
    """Raised when the sandbox directory or its protection cannot be created."""

    message = "Unable to create directory (sandbox)"


class DeletionError(SandboxError):
    """Raised when the sandbox directory cannot be removed."""

    message = "Unable to remove directory (sandbox)"
