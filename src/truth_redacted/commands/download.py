"""
Download command implementation.
Saves the current GDG snapshot as pretty-printed JSON.
"""

import logging
from typing import Any, Optional

from ..core.command_context import CommandContext
from ..core.paths import resolve_data_file
from ..processors.downloader import download_snapshot

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "gdelt_data.json"


def run(config_path: Optional[str], url: Optional[str] = None, output: Optional[str] = None) -> Any:
    """Download a GDG snapshot.

    Args:
        config_path: Path to the main configuration file
        url: Snapshot URL (defaults to the current quarter-hour snapshot)
        output: Destination file; relative paths land in the data directory
            (defaults to ``download.output``)

    Returns:
        Path of the written file
    """
    with CommandContext(config_path) as ctx:
        target = resolve_data_file(
            output or ctx.get_setting('download', 'output', DEFAULT_OUTPUT),
            ensure_parent=True,
        )
        download_snapshot(url, str(target), http_client=ctx.http)
    return target
