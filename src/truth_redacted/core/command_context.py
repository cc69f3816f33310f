"""
Command context for shared initialization across CLI commands.

Loads and validates the configuration once and builds the objects most
commands need (HTTP client, redactor, feed adapter).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import ConfigManager, word_lists
from .http_client import RetryableHTTPClient
from ..processors.feed_adapter import FeedAdapter
from ..processors.redactor import Redactor

logger = logging.getLogger(__name__)


class CommandContext:
    """Encapsulates shared initialization logic for CLI commands.

    Example:
        ```python
        with CommandContext(config_path) as ctx:
            result = ctx.feed_adapter().load()
        ```
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize command context with a validated config.

        Raises:
            ValueError: If configuration is invalid
        """
        self.config_manager = ConfigManager(config_path)

        if not self.config_manager.validate_config():
            raise ValueError("Invalid configuration. Run 'truth-redacted status' for details.")

        self.config = self.config_manager.load_config()
        self.http = RetryableHTTPClient.from_config(self.config_manager.get_feed_config())

        logger.debug(f"CommandContext initialized with config from {self.config_manager.config_path}")

    def redactor(self) -> Redactor:
        return Redactor(**word_lists(self.config_manager.get_redaction_config()))

    def feed_adapter(self) -> FeedAdapter:
        return FeedAdapter.from_config(self.config_manager, http_client=self.http)

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Value of ``section.key`` from the config, or *default*."""
        value = self.config_manager.get_section(section).get(key)
        return default if value is None else value

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.http.close()
