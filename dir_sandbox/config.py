"""
Configuration management for sandbox directories.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from .base import FileProtection
from .directories import BaseDirectory, resolve_base_directory

logger = logging.getLogger(__name__)


class SandboxSettings(BaseModel):
    """Schema of the persisted sandbox configuration."""

    default_file_protection: FileProtection = FileProtection.COMPLETE
    # Store CompleteUntilFirstAuthentication with its own value instead of
    # the legacy CompleteUnlessOpen one
    strict_protection_mapping: bool = False
    base_directory_overrides: dict[BaseDirectory, str] = {}


class SandboxConfig:
    """Manages sandbox defaults and their persistence."""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize sandbox configuration.

        Args:
            config_dir: Directory to store sandbox config (default: ~/.dir_sandbox)
        """
        if config_dir is None:
            config_dir = Path.home() / ".dir_sandbox"

        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "sandbox_config.json"

        self._settings = SandboxSettings()

        # Load existing configuration
        self._load()

    def _load(self):
        """Load configuration from disk."""
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    loaded = json.load(f)
                self._settings = SandboxSettings.model_validate(
                    {**self._settings.model_dump(), **loaded}
                )
            except (OSError, TypeError, ValueError, ValidationError) as e:
                logger.warning(f"Failed to load sandbox config: {e}")

    def save(self):
        """Save configuration to disk."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                json.dump(self._settings.model_dump(mode="json"), f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save sandbox config: {e}")

    @property
    def default_file_protection(self) -> FileProtection:
        """Get the protection policy used when none is given."""
        return self._settings.default_file_protection

    @default_file_protection.setter
    def default_file_protection(self, value):
        """Set the default protection policy."""
        try:
            self._settings.default_file_protection = FileProtection(value)
        except ValueError:
            raise ValueError(
                "default_file_protection must be one of: "
                + ", ".join(p.value for p in FileProtection)
            ) from None
        self.save()

    @property
    def strict_protection_mapping(self) -> bool:
        """Check if the corrected protection mapping is used."""
        return self._settings.strict_protection_mapping

    @strict_protection_mapping.setter
    def strict_protection_mapping(self, value: bool):
        """Choose between the legacy and the corrected protection mapping."""
        self._settings.strict_protection_mapping = bool(value)
        self.save()

    @property
    def base_directory_overrides(self) -> dict[BaseDirectory, Path]:
        """Get the per-kind base directory overrides."""
        return {
            kind: Path(path)
            for kind, path in self._settings.base_directory_overrides.items()
        }

    def set_base_directory_override(self, kind, path: str):
        """Resolve a base directory kind to a fixed absolute path."""
        kind = BaseDirectory(kind)
        abs_path = str(Path(path).expanduser().resolve())
        overrides = dict(self._settings.base_directory_overrides)
        if overrides.get(kind) != abs_path:
            overrides[kind] = abs_path
            self._settings.base_directory_overrides = overrides
            self.save()

    def remove_base_directory_override(self, kind):
        """Go back to the platform location for a base directory kind."""
        kind = BaseDirectory(kind)
        overrides = dict(self._settings.base_directory_overrides)
        if kind in overrides:
            del overrides[kind]
            self._settings.base_directory_overrides = overrides
            self.save()

    def resolve(self, kind) -> Path:
        """Resolve a base directory kind, honouring configured overrides."""
        kind = BaseDirectory(kind)
        overrides = self.base_directory_overrides
        if kind in overrides:
            return overrides[kind]
        return resolve_base_directory(kind)

    def get_status(self) -> dict:
        """Get current sandbox configuration as a dictionary."""
        return {
            "default_file_protection": self.default_file_protection.value,
            "strict_protection_mapping": self.strict_protection_mapping,
            "base_directory_overrides": {
                kind.value: str(path)
                for kind, path in self.base_directory_overrides.items()
            },
        }
