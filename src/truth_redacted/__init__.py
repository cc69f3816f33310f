from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

__version__ = "0.1.0"

from .commands import download as download_cmd
from .commands import load as load_cmd
from .commands import redact as redact_cmd
from .commands import serve as serve_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH
from .core.models import Change, Entry, FeedResult, Stats
from .processors.feed_adapter import FeedAdapter, FeedError
from .processors.redactor import Redactor

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = str(DEFAULT_CONFIG_PATH)

__all__ = [
    'load',
    'redact',
    'download',
    'serve',
    'status',
    'Change',
    'Entry',
    'FeedAdapter',
    'FeedError',
    'FeedResult',
    'Redactor',
    'Stats',
]


def load(
    url: Optional[str] = None,
    *,
    fmt: Optional[str] = None,
    output: Optional[str] = None,
    config_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Fetch and normalize the feed programmatically.

    Args:
        url: Optional feed location; defaults to ``feed.url``.
        fmt: Optional format (auto, rss, json, gdg); defaults to ``feed.format``.
        output: Optional JSON file to write.
        config_path: Path to main YAML config; defaults to the data-dir config.
    """
    cfg_path = config_path or _DEFAULT_CONFIG
    return load_cmd.run(cfg_path, url=url, fmt=fmt, output=output)


def redact(text: str, mode: Optional[str] = None, config_path: Optional[str] = None) -> str:
    """Return *text* redacted with the configured word lists."""
    cfg_path = config_path or _DEFAULT_CONFIG
    return redact_cmd.run(cfg_path, text, mode)["redacted"]


def download(url: Optional[str] = None, output: Optional[str] = None, config_path: Optional[str] = None) -> str:
    """Download a GDG snapshot; returns the path of the written JSON file."""
    cfg_path = config_path or _DEFAULT_CONFIG
    return str(download_cmd.run(cfg_path, url=url, output=output))


def serve(host: Optional[str] = None, port: Optional[int] = None, config_path: Optional[str] = None) -> None:
    """Run the API server (blocking)."""
    cfg_path = config_path or _DEFAULT_CONFIG
    serve_cmd.run(cfg_path, host=host, port=port)


def status(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Return configuration status for programmatic use."""
    cfg_path = config_path or _DEFAULT_CONFIG
    info: Dict[str, Any] = {'config_path': cfg_path}
    if not os.path.exists(cfg_path):
        info.update({'valid': False, 'error': f'Config file not found: {cfg_path}'})
        return info
    try:
        cm = ConfigManager(cfg_path)
        valid = cm.validate_config()
        info.update({
            'valid': bool(valid),
            'feed': cm.get_feed_config(),
            'redaction_mode': cm.get_redaction_config().get('mode', 'soften'),
            'server': cm.get_server_config(),
        })
        return info
    except Exception as e:
        info.update({'valid': False, 'error': str(e)})
        return info
