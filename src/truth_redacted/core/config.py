"""Configuration management for the YAML config file."""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .paths import get_data_dir, get_system_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = get_data_dir() / "config"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"
_TEMPLATE_CONFIG = get_system_path("config", "config.yaml")

FEED_FORMATS = ("auto", "rss", "json", "gdg")
PAIRING_MODES = ("redact", "split")
REDACTION_MODES = ("soften", "mask")
SERVER_MODES = ("local", "remote")

_DEFAULT_CONFIG_TEMPLATE = """# Auto-generated default configuration for truth-redacted
feed:
  url: "http://data.gdeltproject.org/gdeltv3/gdg/RSS-GDG-15MINROLLUP.rss"
  format: "auto"
  pairing: "redact"
  timeout: 15
  max_retries: 3
  rps: 1.0
  max_entries: 100
  min_entries: 1

redaction:
  mode: "soften"
  placeholder: "█████"

server:
  host: "127.0.0.1"
  port: 3000
  mode: "local"
  data_file: "data/sample-data.json"
  remote_url: "https://data.gdeltproject.org/gdeltv3/iatv/gdg/gdg.natgeo.json.gz"

download:
  output: "gdelt_data.json"
"""


def _write_template(path: Path, content: str) -> None:
    """Write templated YAML content to disk with a trailing newline."""
    path.write_text(content.strip() + "\n", encoding="utf-8")


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(x, str) for x in value)


class ConfigManager:
    """Manages loading and validation of the YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the manager and ensure a baseline config file exists."""
        path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        if not path.is_absolute():
            path = path.resolve()
        self.config_path = str(path)
        self.base_dir = str(path.parent)
        self._config = None
        self._ensure_default_config()

    def load_config(self) -> Dict[str, Any]:
        """Load the main configuration file."""
        if self._config is None:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from {self.config_path}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                raise

        return self._config

    def _ensure_default_config(self) -> None:
        """Create the default configuration file if it is missing."""
        config_file = Path(self.config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        if config_file.exists():
            return

        if _TEMPLATE_CONFIG.exists():
            try:
                shutil.copyfile(_TEMPLATE_CONFIG, config_file)
                logger.info("Created default config.yaml at %s", config_file)
                return
            except Exception as exc:
                logger.warning("Failed to copy template config: %s", exc)
        _write_template(config_file, _DEFAULT_CONFIG_TEMPLATE)
        logger.info("Created fallback default config.yaml at %s", config_file)

    def get_section(self, name: str) -> Dict[str, Any]:
        """Return a top-level section of the config, or an empty dict."""
        section = self.load_config().get(name)
        return section if isinstance(section, dict) else {}

    def get_feed_config(self) -> Dict[str, Any]:
        return self.get_section('feed')

    def get_redaction_config(self) -> Dict[str, Any]:
        return self.get_section('redaction')

    def get_server_config(self) -> Dict[str, Any]:
        return self.get_section('server')

    def get_download_config(self) -> Dict[str, Any]:
        return self.get_section('download')

    def validate_config(self) -> bool:
        """Validate the configuration file."""
        try:
            config = self.load_config()
            if not isinstance(config, dict):
                logger.error("Configuration root must be a mapping")
                return False

            required_sections = ['feed', 'server']
            for section in required_sections:
                if not isinstance(config.get(section), dict):
                    logger.error(f"Missing required section '{section}' in main config")
                    return False

            feed_cfg = config['feed']
            url = feed_cfg.get('url')
            if url is not None and not isinstance(url, str):
                logger.error("'feed.url' must be a string")
                return False
            fmt = feed_cfg.get('format', 'auto')
            if fmt not in FEED_FORMATS:
                logger.error(f"'feed.format' must be one of {', '.join(FEED_FORMATS)} (got '{fmt}')")
                return False
            pairing = feed_cfg.get('pairing', 'redact')
            if pairing not in PAIRING_MODES:
                logger.error(f"'feed.pairing' must be one of {', '.join(PAIRING_MODES)} (got '{pairing}')")
                return False
            for key in ('max_entries', 'min_entries'):
                value = feed_cfg.get(key)
                if value is None:
                    continue
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    logger.error(f"'feed.{key}' must be a non-negative integer")
                    return False
            if feed_cfg.get('max_entries') == 0:
                logger.error("'feed.max_entries' must be positive")
                return False

            redaction_cfg = config.get('redaction') or {}
            if not isinstance(redaction_cfg, dict):
                logger.error("'redaction' must be a mapping")
                return False
            mode = redaction_cfg.get('mode', 'soften')
            if mode not in REDACTION_MODES:
                logger.error(f"'redaction.mode' must be one of {', '.join(REDACTION_MODES)} (got '{mode}')")
                return False
            for key in ('locations', 'sensitive_terms', 'highlight_terms'):
                value = redaction_cfg.get(key)
                if value is not None and not _is_str_list(value):
                    logger.error(f"'redaction.{key}' must be a list of strings")
                    return False
            placeholder = redaction_cfg.get('placeholder')
            if placeholder is not None and (not isinstance(placeholder, str) or not placeholder):
                logger.error("'redaction.placeholder' must be a non-empty string")
                return False
            replacements = redaction_cfg.get('replacements')
            if replacements is not None:
                if not isinstance(replacements, dict) or not all(
                    isinstance(k, str) and isinstance(v, str) for k, v in replacements.items()
                ):
                    logger.error("'redaction.replacements' must map strings to strings")
                    return False

            server_cfg = config['server']
            server_mode = server_cfg.get('mode', 'local')
            if server_mode not in SERVER_MODES:
                logger.error(f"'server.mode' must be one of {', '.join(SERVER_MODES)} (got '{server_mode}')")
                return False
            port = server_cfg.get('port', 3000)
            if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
                logger.error("'server.port' must be an integer between 1 and 65535")
                return False
            if server_mode == 'remote' and not isinstance(server_cfg.get('remote_url'), str):
                logger.error("'server.remote_url' is required when server.mode is 'remote'")
                return False

            logger.info("Configuration validation passed")
            return True

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            return False


def word_lists(redaction_cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the optional Redactor keyword arguments from a redaction section."""
    kwargs: Dict[str, Any] = {}
    for key in ('locations', 'replacements', 'sensitive_terms', 'highlight_terms', 'placeholder'):
        if redaction_cfg.get(key) is not None:
            kwargs[key] = redaction_cfg[key]
    return kwargs


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CONFIG_DIR",
    "FEED_FORMATS",
    "PAIRING_MODES",
    "REDACTION_MODES",
    "SERVER_MODES",
    "word_lists",
]
