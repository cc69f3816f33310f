"""Runtime data directory and bundled asset locations.

The data directory holds the user's ``config/config.yaml``, downloaded
snapshots and the local data file served by ``/api/gdelt``. Bundled assets
(the config template and the sample entries) live in the package's
``system/`` folder.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

_ENV_VAR = "TRUTH_REDACTED_DATA_DIR"
_DEFAULT_DIRNAME = ".truth_redacted"
_SYSTEM_DIR = Path(__file__).resolve().parents[1] / "system"

# Bundled files copied into a fresh data dir (relative to system/)
_SEED_FILES = (Path("data") / "sample-data.json",)


def get_data_dir() -> Path:
    """Return the runtime data directory.

    ``$TRUTH_REDACTED_DATA_DIR`` wins when set and non-blank (relative values
    are taken from the current working directory); otherwise
    ``~/.truth_redacted``.
    """
    override = (os.getenv(_ENV_VAR) or "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / _DEFAULT_DIRNAME).resolve()


def ensure_data_dir() -> Path:
    """Create the data directory (seeding bundled sample data) and return it."""
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    _seed_from_system(data_dir)
    return data_dir


def resolve_data_path(*relative: str, ensure_parent: bool = False) -> Path:
    """Join *relative* onto the data directory.

    A leading ``.truth_redacted`` component is dropped so that values written
    as ``.truth_redacted/gdelt_data.json`` do not nest the directory twice.
    """
    parts = [p for p in relative if p]
    if parts and parts[0] == _DEFAULT_DIRNAME:
        parts = parts[1:]
    full_path = ensure_data_dir().joinpath(*parts)
    if ensure_parent:
        full_path.parent.mkdir(parents=True, exist_ok=True)
    return full_path


def resolve_data_file(path: str, ensure_parent: bool = False) -> Path:
    """Resolve a file path taken from the config.

    Absolute paths are used as-is, relative ones land in the data directory.
    """
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        return resolve_data_path(*candidate.parts, ensure_parent=ensure_parent)
    if ensure_parent:
        candidate.parent.mkdir(parents=True, exist_ok=True)
    return candidate


def get_system_path(*relative: str) -> Path:
    """Path of a bundled asset under ``system/``."""
    return _SYSTEM_DIR.joinpath(*relative)


def _seed_from_system(target: Path) -> None:
    for rel in _SEED_FILES:
        dest = target / rel
        src = _SYSTEM_DIR / rel
        if dest.exists() or not src.exists():
            continue
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)


__all__ = [
    "get_data_dir",
    "ensure_data_dir",
    "resolve_data_path",
    "resolve_data_file",
    "get_system_path",
]
