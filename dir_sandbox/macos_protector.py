"""
macOS file protection using the xattr command-line tool.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from .base import FileProtector


class XattrCommandProtector(FileProtector):
    """Stores the protection policy with ``xattr`` on macOS."""

    attribute_name = "com.dir_sandbox.file-protection"

    def is_available(self) -> bool:
        """Check if xattr is available on the system."""
        return shutil.which("xattr") is not None

    def get_platform(self) -> str:
        """Get the platform this protector supports."""
        return "macos"

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["xattr", *args],
            capture_output=True,
            text=True,
            check=False,
        )

    def apply(self, path: Path, value: str) -> None:
        """
        Write the attribute with ``xattr -w``.

        Raises:
            OSError: If xattr exits with a non-zero status
        """
        result = self._run(["-w", self.attribute_name, value, os.fspath(path)])
        if result.returncode != 0:
            raise OSError(
                f"xattr failed with exit code {result.returncode}: "
                f"{result.stderr.strip()}"
            )

    def read(self, path: Path) -> Optional[str]:
        """Read the attribute with ``xattr -p``; a missing attribute gives None."""
        result = self._run(["-p", self.attribute_name, os.fspath(path)])
        if result.returncode != 0:
            return None
        return result.stdout.strip()
