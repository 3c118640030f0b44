"""
Linux file protection using user extended attributes.
"""

import errno
import logging
import os
from pathlib import Path
from typing import Optional

from .base import FileProtector

logger = logging.getLogger(__name__)

# errno values meaning "this filesystem has no user extended attributes"
_UNSUPPORTED_ERRNOS = {
    getattr(errno, name) for name in ("ENOTSUP", "EOPNOTSUPP") if hasattr(errno, name)
}

# errno values meaning "no such attribute" or "attributes unsupported here"
_MISSING_ATTRIBUTE_ERRNOS = _UNSUPPORTED_ERRNOS | {
    getattr(errno, name) for name in ("ENODATA", "ENOATTR") if hasattr(errno, name)
}


class XattrProtector(FileProtector):
    """Stores the protection policy as a ``user.`` extended attribute."""

    attribute_name = "user.dir_sandbox.file_protection"

    def is_available(self) -> bool:
        """Check if the os module exposes extended attribute calls."""
        return hasattr(os, "setxattr") and hasattr(os, "getxattr")

    def get_platform(self) -> str:
        """Get the platform this protector supports."""
        return "linux"

    def apply(self, path: Path, value: str) -> None:
        """
        Write the attribute.

        Filesystems without user xattr support are treated like the no-op
        protector: a warning is logged and nothing is stored. Any other
        OSError propagates.
        """
        try:
            os.setxattr(os.fspath(path), self.attribute_name, value.encode("utf-8"))
        except OSError as e:
            if e.errno not in _UNSUPPORTED_ERRNOS:
                raise
            logger.warning(
                f"Filesystem at {path} does not support extended attributes, "
                f"{value} not applied"
            )

    def read(self, path: Path) -> Optional[str]:
        """Read the attribute back, treating a missing attribute as None."""
        try:
            raw = os.getxattr(os.fspath(path), self.attribute_name)
        except OSError as e:
            if e.errno in _MISSING_ATTRIBUTE_ERRNOS:
                return None
            raise
        return raw.decode("utf-8")
