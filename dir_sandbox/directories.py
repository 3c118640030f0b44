"""
Resolution of symbolic base directories to absolute per-user paths.

Each platform has its own convention for where documents, application data
and caches live:

- Linux: XDG base directories and ``user-dirs.dirs``
- macOS: folders under the home directory and ``~/Library``
- Windows: the user profile plus ``%APPDATA%`` / ``%LOCALAPPDATA%``

Only the current user's domain is supported.
"""

import logging
import os
import shlex
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional

from .base import get_current_platform

logger = logging.getLogger(__name__)


class BaseDirectory(str, Enum):
    """Well-known locations a sandbox can live under."""

    DOCUMENTS = "documents"
    APPLICATION_SUPPORT = "application_support"
    CACHES = "caches"
    DESKTOP = "desktop"
    DOWNLOADS = "downloads"
    MUSIC = "music"
    PICTURES = "pictures"
    MOVIES = "movies"


# Callable used to turn a BaseDirectory into a concrete path
DirectoryResolver = Callable[[BaseDirectory], Path]

# XDG user-dirs key and the default folder name under $HOME
_XDG_USER_DIRS = {
    BaseDirectory.DOCUMENTS: ("XDG_DOCUMENTS_DIR", "Documents"),
    BaseDirectory.DESKTOP: ("XDG_DESKTOP_DIR", "Desktop"),
    BaseDirectory.DOWNLOADS: ("XDG_DOWNLOAD_DIR", "Downloads"),
    BaseDirectory.MUSIC: ("XDG_MUSIC_DIR", "Music"),
    BaseDirectory.PICTURES: ("XDG_PICTURES_DIR", "Pictures"),
    BaseDirectory.MOVIES: ("XDG_VIDEOS_DIR", "Videos"),
}

_MACOS_DIRS = {
    BaseDirectory.DOCUMENTS: "Documents",
    BaseDirectory.APPLICATION_SUPPORT: "Library/Application Support",
    BaseDirectory.CACHES: "Library/Caches",
    BaseDirectory.DESKTOP: "Desktop",
    BaseDirectory.DOWNLOADS: "Downloads",
    BaseDirectory.MUSIC: "Music",
    BaseDirectory.PICTURES: "Pictures",
    BaseDirectory.MOVIES: "Movies",
}

_WINDOWS_PROFILE_DIRS = {
    BaseDirectory.DOCUMENTS: "Documents",
    BaseDirectory.DESKTOP: "Desktop",
    BaseDirectory.DOWNLOADS: "Downloads",
    BaseDirectory.MUSIC: "Music",
    BaseDirectory.PICTURES: "Pictures",
    BaseDirectory.MOVIES: "Videos",
}


def _read_user_dirs(config_home: Path, home: Path) -> dict[str, str]:
    """Parse ``user-dirs.dirs``, expanding $HOME. Missing file gives {}."""
    user_dirs_file = config_home / "user-dirs.dirs"
    entries = {}
    try:
        with open(user_dirs_file, encoding="utf-8") as f:
            lines = f.readlines()
    except FileNotFoundError:
        return entries
    except OSError as e:
        logger.warning(f"Failed to read {user_dirs_file}: {e}")
        return entries

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw_value = line.partition("=")
        try:
            parts = shlex.split(raw_value)
        except ValueError:
            logger.debug(f"Skipping malformed user-dirs entry: {line}")
            continue
        if not parts:
            continue
        value = parts[0]
        if value.startswith("$HOME"):
            value = str(home) + value[len("$HOME"):]
        entries[key.strip()] = value
    return entries


def _resolve_linux(
    kind: BaseDirectory, home: Path, environ: Mapping[str, str]
) -> Path:
    if kind == BaseDirectory.APPLICATION_SUPPORT:
        return Path(environ.get("XDG_DATA_HOME") or home / ".local" / "share")
    if kind == BaseDirectory.CACHES:
        return Path(environ.get("XDG_CACHE_HOME") or home / ".cache")

    env_key, default_name = _XDG_USER_DIRS[kind]
    if environ.get(env_key):
        return Path(environ[env_key])

    config_home = Path(environ.get("XDG_CONFIG_HOME") or home / ".config")
    user_dirs = _read_user_dirs(config_home, home)
    # xdg-user-dirs sets a folder to $HOME itself to mean "disabled"
    if user_dirs.get(env_key) and Path(user_dirs[env_key]) != home:
        return Path(user_dirs[env_key])
    return home / default_name


def _resolve_windows(
    kind: BaseDirectory, home: Path, environ: Mapping[str, str]
) -> Path:
    if kind == BaseDirectory.APPLICATION_SUPPORT:
        return Path(environ.get("APPDATA") or home / "AppData" / "Roaming")
    if kind == BaseDirectory.CACHES:
        return Path(environ.get("LOCALAPPDATA") or home / "AppData" / "Local")
    return home / _WINDOWS_PROFILE_DIRS[kind]


def resolve_base_directory(
    kind: BaseDirectory,
    platform: Optional[str] = None,
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Resolve a base directory kind to an absolute path for the current user.

    Args:
        kind: The symbolic location to resolve
        platform: Override platform detection (mainly for testing)
        home: Override the home directory (mainly for testing)
        environ: Override the process environment (mainly for testing)

    Returns:
        Absolute path of the base directory. The directory itself is not
        created or checked.
    """
    kind = BaseDirectory(kind)
    if platform is None:
        platform = get_current_platform()
    if environ is None:
        environ = os.environ
    if home is None:
        home = Path.home()
    home = Path(home)

    if platform == "macos":
        resolved = home / _MACOS_DIRS[kind]
    elif platform == "windows":
        resolved = _resolve_windows(kind, home, environ)
    else:
        resolved = _resolve_linux(kind, home, environ)

    return Path(os.path.abspath(resolved))
