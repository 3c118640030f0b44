"""
Base classes and interfaces for file protection implementations.
"""

import platform
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Optional


class FileProtection(str, Enum):
    """Data protection tiers that can be applied to a sandbox directory."""

    # No file protection
    NONE = "None"
    # Protected shortly after the device/session is locked
    COMPLETE = "Complete"
    # Like COMPLETE, but files already open stay readable
    COMPLETE_UNLESS_OPEN = "CompleteUnlessOpen"
    # Protected only between boot and the first unlock
    COMPLETE_UNTIL_FIRST_AUTHENTICATION = "CompleteUntilFirstAuthentication"


PROTECTION_COMPLETE = "NSFileProtectionComplete"
PROTECTION_COMPLETE_UNLESS_OPEN = "NSFileProtectionCompleteUnlessOpen"
PROTECTION_COMPLETE_UNTIL_FIRST_AUTHENTICATION = (
    "NSFileProtectionCompleteUntilFirstUserAuthentication"
)

# Mapping as historically shipped: CompleteUntilFirstAuthentication is
# stored with the CompleteUnlessOpen value.
LEGACY_PROTECTION_VALUES = {
    FileProtection.NONE: None,
    FileProtection.COMPLETE: PROTECTION_COMPLETE,
    FileProtection.COMPLETE_UNLESS_OPEN: PROTECTION_COMPLETE_UNLESS_OPEN,
    FileProtection.COMPLETE_UNTIL_FIRST_AUTHENTICATION: PROTECTION_COMPLETE_UNLESS_OPEN,
}

STRICT_PROTECTION_VALUES = {
    **LEGACY_PROTECTION_VALUES,
    FileProtection.COMPLETE_UNTIL_FIRST_AUTHENTICATION: (
        PROTECTION_COMPLETE_UNTIL_FIRST_AUTHENTICATION
    ),
}


def get_protection_value(
    protection: FileProtection, strict: bool = False
) -> Optional[str]:
    """
    Map a protection policy to the attribute value stored on disk.

    Args:
        protection: The policy to map
        strict: Use the corrected table instead of the legacy one

    Returns:
        The attribute value, or None when nothing should be applied
    """
    table = STRICT_PROTECTION_VALUES if strict else LEGACY_PROTECTION_VALUES
    return table[FileProtection(protection)]


class FileProtector(ABC):
    """Abstract base class for storing a protection attribute on a directory."""

    attribute_name: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the protection mechanism is available on this system."""
        pass

    @abstractmethod
    def get_platform(self) -> str:
        """Get the platform this protector supports."""
        pass

    @abstractmethod
    def apply(self, path: Path, value: str) -> None:
        """
        Store a protection attribute on a filesystem entry.

        Args:
            path: The directory to protect
            value: Attribute value from the protection table

        Raises:
            OSError: If the attribute cannot be written
        """
        pass

    @abstractmethod
    def read(self, path: Path) -> Optional[str]:
        """Return the stored protection attribute, or None if there is none."""
        pass


def get_current_platform() -> str:
    """Get the current platform name."""
    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    return system
