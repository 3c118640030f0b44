"""
Sandboxed directories for dir-sandbox.

Manages a single directory under one of the user's standard locations
(documents, application support, caches, ...) with a data protection
policy stored on it.

Supports:
- Linux: protection stored as a user extended attribute
- macOS: protection stored with the xattr tool
- All platforms: creation, path/URL access and recursive deletion
"""

from .base import FileProtection
from .config import SandboxConfig
from .directories import BaseDirectory, resolve_base_directory
from .errors import CreationError, DeletionError, SandboxError
from .file_protection import get_file_protector
from .sandbox import Sandbox

__all__ = [
    "BaseDirectory",
    "CreationError",
    "DeletionError",
    "FileProtection",
    "Sandbox",
    "SandboxConfig",
    "SandboxError",
    "get_file_protector",
    "resolve_base_directory",
]
