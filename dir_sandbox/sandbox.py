"""
A managed directory living under one of the user's standard locations.

A ``Sandbox`` is a plain value: it remembers where its directory lives and
which protection policy it was created with. The directory is created (with
its protection attribute) by ``Sandbox.create`` and only removed by an
explicit call to ``delete``.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import SplitResult, urlsplit
from urllib.request import url2pathname

from .base import FileProtection, FileProtector, get_protection_value
from .config import SandboxConfig
from .directories import BaseDirectory, DirectoryResolver, resolve_base_directory
from .errors import CreationError, DeletionError
from .file_protection import get_file_protector

logger = logging.getLogger(__name__)


def _validate_name(name: str) -> str:
    """Make sure the sandbox name is a single path component."""
    if not isinstance(name, str) or not name:
        raise ValueError("Sandbox name must be a non-empty string")
    if name in (".", "..") or "/" in name or (os.sep != "/" and os.sep in name):
        raise ValueError(f"Sandbox name must be a single path component: {name!r}")
    return name


@dataclass(frozen=True)
class Sandbox:
    """A directory at ``<base_directory>/<name>``; use ``Sandbox.create`` to build one."""

    name: str
    base_directory: BaseDirectory
    file_protection: FileProtection
    location: Path

    @classmethod
    def create(
        cls,
        base_directory: BaseDirectory,
        name: str,
        file_protection: FileProtection = FileProtection.COMPLETE,
        *,
        resolver: Optional[DirectoryResolver] = None,
        protector: Optional[FileProtector] = None,
        strict_protection: bool = False,
    ) -> "Sandbox":
        """
        Create (or re-open) the sandbox directory at ``base_directory``/``name``.

        If the directory is already there it is left untouched, including its
        protection attribute. Otherwise it is created together with any
        missing parents and the protection policy is applied to it.

        Args:
            base_directory: Standard location the sandbox lives under
            name: Leaf directory name
            file_protection: Protection policy for a newly created directory
            resolver: Lookup for base directories (default: platform lookup)
            protector: Attribute writer (default: platform protector)
            strict_protection: Use the corrected protection mapping

        Returns:
            The Sandbox value

        Raises:
            CreationError: If the directory or its protection cannot be created
            ValueError: If ``name`` is not a single path component
        """
        base_directory = BaseDirectory(base_directory)
        file_protection = FileProtection(file_protection)
        _validate_name(name)

        resolve = resolver or resolve_base_directory
        location = Path(os.path.abspath(Path(resolve(base_directory)) / name))

        sandbox = cls(
            name=name,
            base_directory=base_directory,
            file_protection=file_protection,
            location=location,
        )
        sandbox._create_directory_if_necessary(
            protector or get_file_protector(), strict_protection
        )
        return sandbox

    @classmethod
    def in_documents(cls, name: str, file_protection=FileProtection.COMPLETE, **kwargs):
        """Create a sandbox in the user's documents directory."""
        return cls.create(BaseDirectory.DOCUMENTS, name, file_protection, **kwargs)

    @classmethod
    def in_application_support(
        cls, name: str, file_protection=FileProtection.COMPLETE, **kwargs
    ):
        """Create a sandbox in the user's application support directory."""
        return cls.create(
            BaseDirectory.APPLICATION_SUPPORT, name, file_protection, **kwargs
        )

    @classmethod
    def in_caches(cls, name: str, file_protection=FileProtection.COMPLETE, **kwargs):
        """Create a sandbox in the user's caches directory."""
        return cls.create(BaseDirectory.CACHES, name, file_protection, **kwargs)

    @classmethod
    def from_config(
        cls,
        base_directory: BaseDirectory,
        name: str,
        config: Optional[SandboxConfig] = None,
        **kwargs,
    ) -> "Sandbox":
        """
        Create a sandbox using the defaults stored in a SandboxConfig.

        Explicit keyword arguments win over the configured values.
        """
        config = config or SandboxConfig()
        kwargs.setdefault("file_protection", config.default_file_protection)
        kwargs.setdefault("strict_protection", config.strict_protection_mapping)
        kwargs.setdefault("resolver", config.resolve)
        return cls.create(base_directory, name, **kwargs)

    def __str__(self) -> str:
        return self.url.geturl()

    @property
    def url(self) -> SplitResult:
        """The ``file://`` URL of the sandbox directory."""
        return urlsplit(self.location.as_uri())

    @property
    def path(self) -> str:
        """
        The sandbox location as a plain path, without any ``file://`` scheme.

        Filesystem calls reject paths that carry a scheme, so this is what
        should be handed to them.
        """
        return url2pathname(self.url.path)

    def exists(self) -> bool:
        """Check if the sandbox directory is currently on disk."""
        return self.location.is_dir()

    def file_protection_attribute(
        self, protector: Optional[FileProtector] = None
    ) -> Optional[str]:
        """Read the protection attribute currently stored on the directory."""
        protector = protector or get_file_protector()
        return protector.read(self.location)

    def delete(self) -> None:
        """
        Permanently remove the sandbox directory and everything in it.

        The Sandbox value stays usable afterwards; creating it again with
        the same arguments recreates the directory.

        Raises:
            DeletionError: If the directory is missing or cannot be removed
        """
        try:
            if os.path.islink(self.path) or not os.path.isdir(self.path):
                os.unlink(self.path)
            else:
                shutil.rmtree(self.path)
        except OSError as e:
            logger.error(f"Failed to delete sandbox {self.name} at {self.path}: {e}")
            raise DeletionError(e) from e
        logger.info(f"Deleted sandbox {self.name} at {self.path}")

    def _create_directory_if_necessary(
        self, protector: FileProtector, strict_protection: bool
    ) -> None:
        """Create the container and apply protection unless it already exists."""
        if os.path.exists(self.path):
            logger.debug(f"Sandbox {self.name} already exists at {self.path}")
            return

        created = self._missing_directories()
        try:
            os.makedirs(self.path, exist_ok=True)
            try:
                self._set_data_protection(protector, strict_protection)
            except OSError:
                # Never leave an unprotected directory behind
                self._remove_directories(created)
                raise
        except OSError as e:
            logger.error(f"Failed to create sandbox {self.name} at {self.path}: {e}")
            raise CreationError(e) from e

        logger.info(
            f"Created sandbox {self.name} at {self.path} "
            f"(protection: {self.file_protection.value})"
        )

    def _missing_directories(self) -> list[str]:
        """Directories makedirs would create, deepest first."""
        missing = []
        current = self.path
        while not os.path.exists(current):
            missing.append(current)
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        return missing

    def _remove_directories(self, directories: list[str]) -> None:
        for directory in directories:
            try:
                os.rmdir(directory)
            except OSError as cleanup_error:
                logger.error(
                    f"Failed to remove unprotected sandbox directory "
                    f"{directory}: {cleanup_error}"
                )
                return

    def _set_data_protection(
        self, protector: FileProtector, strict_protection: bool
    ) -> None:
        value = get_protection_value(self.file_protection, strict=strict_protection)
        if value is not None:
            protector.apply(Path(self.path), value)
