"""Tests for runtime data directory resolution helpers."""

from __future__ import annotations

import os
import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock

# Ensure the repository's src/ directory is importable without installation.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from truth_redacted.core.paths import (  # noqa: E402
    ensure_data_dir,
    get_data_dir,
    get_system_path,
    resolve_data_file,
)


class DataDirEnvironmentOverrideTests(unittest.TestCase):
    """Verify that TRUTH_REDACTED_DATA_DIR overrides the runtime data dir."""

    def test_get_data_dir_honors_environment_override(self) -> None:
        with TemporaryDirectory() as tmp:
            override = Path(tmp) / "custom-location"
            with mock.patch.dict(os.environ, {"TRUTH_REDACTED_DATA_DIR": str(override)}, clear=False):
                data_dir = get_data_dir()
        self.assertEqual(data_dir, override.resolve())

    def test_ensure_data_dir_creates_and_seeds_override_directory(self) -> None:
        """ensure_data_dir should create the directory and copy the bundled sample data."""
        with TemporaryDirectory() as tmp:
            override = Path(tmp) / "nested" / "override"
            with mock.patch.dict(os.environ, {"TRUTH_REDACTED_DATA_DIR": str(override)}, clear=False):
                data_dir = ensure_data_dir()
                self.assertTrue(override.exists(), "override directory was not created")
                self.assertTrue((override / "data" / "sample-data.json").exists())
        self.assertEqual(data_dir, override.resolve())

    def test_resolve_data_file_relative_and_absolute(self) -> None:
        with TemporaryDirectory() as tmp:
            override = Path(tmp) / "data-root"
            with mock.patch.dict(os.environ, {"TRUTH_REDACTED_DATA_DIR": str(override)}, clear=False):
                relative = resolve_data_file("exports/out.json", ensure_parent=True)
                self.assertEqual(relative, override.resolve() / "exports" / "out.json")
                self.assertTrue(relative.parent.is_dir())

                absolute = Path(tmp) / "elsewhere.json"
                self.assertEqual(resolve_data_file(str(absolute)), absolute)

    def test_system_assets_are_bundled(self) -> None:
        self.assertTrue(get_system_path("config", "config.yaml").exists())
        self.assertTrue(get_system_path("data", "sample-data.json").exists())


if __name__ == "__main__":
    unittest.main()
