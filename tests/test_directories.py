"""Tests for base directory resolution."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from dir_sandbox.directories import BaseDirectory, resolve_base_directory


class TestLinuxDirectories(unittest.TestCase):
    """XDG based resolution."""

    def setUp(self):
        """Set up test fixtures."""
        self.home = Path(tempfile.mkdtemp(prefix="dir_sandbox_home_"))

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.home, ignore_errors=True)

    def resolve(self, kind, environ=None):
        return resolve_base_directory(
            kind, platform="linux", home=self.home, environ=environ or {}
        )

    def test_defaults_without_environment(self):
        """Falls back to the XDG defaults under $HOME."""
        self.assertEqual(self.resolve(BaseDirectory.DOCUMENTS), self.home / "Documents")
        self.assertEqual(
            self.resolve(BaseDirectory.APPLICATION_SUPPORT),
            self.home / ".local" / "share",
        )
        self.assertEqual(self.resolve(BaseDirectory.CACHES), self.home / ".cache")
        self.assertEqual(self.resolve(BaseDirectory.MOVIES), self.home / "Videos")

    def test_xdg_environment_variables(self):
        """XDG_* variables take precedence over defaults."""
        environ = {
            "XDG_DATA_HOME": "/data/share",
            "XDG_CACHE_HOME": "/data/cache",
            "XDG_DOCUMENTS_DIR": "/data/docs",
        }
        self.assertEqual(
            self.resolve(BaseDirectory.APPLICATION_SUPPORT, environ),
            Path("/data/share"),
        )
        self.assertEqual(
            self.resolve(BaseDirectory.CACHES, environ), Path("/data/cache")
        )
        self.assertEqual(
            self.resolve(BaseDirectory.DOCUMENTS, environ), Path("/data/docs")
        )

    def test_user_dirs_file(self):
        """Entries in user-dirs.dirs are honoured and $HOME is expanded."""
        config_home = self.home / ".config"
        config_home.mkdir()
        (config_home / "user-dirs.dirs").write_text(
            "# written by xdg-user-dirs-update\n"
            'XDG_DOCUMENTS_DIR="$HOME/Dokumente"\n'
            'XDG_DOWNLOAD_DIR="$HOME/"\n'
            'XDG_MUSIC_DIR="/srv/music"\n'
        )

        self.assertEqual(
            self.resolve(BaseDirectory.DOCUMENTS), self.home / "Dokumente"
        )
        self.assertEqual(self.resolve(BaseDirectory.MUSIC), Path("/srv/music"))
        # A folder pointing at $HOME itself is disabled
        self.assertEqual(
            self.resolve(BaseDirectory.DOWNLOADS), self.home / "Downloads"
        )

    def test_user_dirs_respects_xdg_config_home(self):
        """user-dirs.dirs is looked up under $XDG_CONFIG_HOME."""
        config_home = self.home / "custom-config"
        config_home.mkdir()
        (config_home / "user-dirs.dirs").write_text(
            'XDG_PICTURES_DIR="$HOME/Bilder"\n'
        )

        resolved = self.resolve(
            BaseDirectory.PICTURES, {"XDG_CONFIG_HOME": str(config_home)}
        )

        self.assertEqual(resolved, self.home / "Bilder")

    def test_resolved_paths_are_absolute(self):
        """Relative XDG values are made absolute."""
        resolved = self.resolve(BaseDirectory.CACHES, {"XDG_CACHE_HOME": "rel/cache"})
        self.assertTrue(resolved.is_absolute())

    def test_string_kind_accepted(self):
        """Kinds may be given by value."""
        self.assertEqual(self.resolve("caches"), self.home / ".cache")


class TestOtherPlatforms(unittest.TestCase):
    """macOS and Windows conventions."""

    home = Path("/Users/tester")

    def test_macos_locations(self):
        """macOS uses ~/Library for application data and caches."""
        expected = {
            BaseDirectory.DOCUMENTS: self.home / "Documents",
            BaseDirectory.APPLICATION_SUPPORT: self.home / "Library" / "Application Support",
            BaseDirectory.CACHES: self.home / "Library" / "Caches",
            BaseDirectory.MOVIES: self.home / "Movies",
        }
        for kind, path in expected.items():
            with self.subTest(kind=kind):
                self.assertEqual(
                    resolve_base_directory(
                        kind, platform="macos", home=self.home, environ={}
                    ),
                    path,
                )

    def test_windows_locations(self):
        """Windows reads APPDATA and LOCALAPPDATA."""
        environ = {
            "APPDATA": "/profile/AppData/Roaming",
            "LOCALAPPDATA": "/profile/AppData/Local",
        }
        self.assertEqual(
            resolve_base_directory(
                BaseDirectory.APPLICATION_SUPPORT,
                platform="windows",
                home=self.home,
                environ=environ,
            ),
            Path("/profile/AppData/Roaming"),
        )
        self.assertEqual(
            resolve_base_directory(
                BaseDirectory.CACHES, platform="windows", home=self.home, environ=environ
            ),
            Path("/profile/AppData/Local"),
        )
        self.assertEqual(
            resolve_base_directory(
                BaseDirectory.CACHES, platform="windows", home=self.home, environ={}
            ),
            self.home / "AppData" / "Local",
        )
        self.assertEqual(
            resolve_base_directory(
                BaseDirectory.DOCUMENTS, platform="windows", home=self.home, environ={}
            ),
            self.home / "Documents",
        )

    @patch("dir_sandbox.directories.get_current_platform")
    def test_platform_detection_used_by_default(self, mock_platform):
        """Without an override the current platform is detected."""
        mock_platform.return_value = "macos"

        resolved = resolve_base_directory(
            BaseDirectory.CACHES, home=self.home, environ={}
        )

        self.assertEqual(resolved, self.home / "Library" / "Caches")
        mock_platform.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
