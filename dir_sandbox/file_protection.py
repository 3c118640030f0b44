"""
Factory for creating platform-specific file protectors.
"""

import logging
from pathlib import Path
from typing import Optional

from .base import FileProtector, get_current_platform
from .linux_protector import XattrProtector
from .macos_protector import XattrCommandProtector

logger = logging.getLogger(__name__)


class NoOpProtector(FileProtector):
    """No-op protector for platforms without attribute support."""

    def is_available(self) -> bool:
        """Always available as a fallback."""
        return True

    def get_platform(self) -> str:
        """Platform-agnostic."""
        return "noop"

    def apply(self, path: Path, value: str) -> None:
        """Apply nothing."""
        logger.warning(
            f"No file protection mechanism on this platform, "
            f"{value} not applied to {path}"
        )

    def read(self, path: Path) -> Optional[str]:
        """Nothing is ever stored."""
        return None


def get_file_protector(platform: Optional[str] = None) -> FileProtector:
    """
    Get the appropriate file protector for the current platform.

    Args:
        platform: Override platform detection (mainly for testing)

    Returns:
        FileProtector instance for the current platform
    """
    if platform is None:
        platform = get_current_platform()

    protectors = [
        XattrProtector(),
        XattrCommandProtector(),
    ]

    for protector in protectors:
        if protector.get_platform() == platform and protector.is_available():
            logger.debug(f"Using file protector: {protector.__class__.__name__}")
            return protector

    # Fallback to no-op protector
    return NoOpProtector()
