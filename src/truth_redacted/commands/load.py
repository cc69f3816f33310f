"""
Load command implementation.
Fetches the configured feed, normalizes it into entries and writes them as JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.command_context import CommandContext
from ..processors.stats import compute_stats

logger = logging.getLogger(__name__)


def run(
    config_path: Optional[str],
    url: Optional[str] = None,
    fmt: Optional[str] = None,
    output: Optional[str] = None,
) -> Dict[str, Any]:
    """Load and normalize a feed.

    Workflow:
    1. Load and validate configuration.
    2. Fetch the feed (configured URL unless *url* is given) and normalize it;
       any failure falls back to the bundled sample entries.
    3. Compute statistics and, when *output* is set, write the result as JSON.

    Args:
        config_path: Path to the main configuration file
        url: Optional feed location overriding ``feed.url``
        fmt: Optional format overriding ``feed.format``
        output: Optional JSON destination

    Returns:
        The serialized result: ``origin``, ``url``, ``error``, ``entries``, ``stats``
    """
    logger.info("Starting load command")

    with CommandContext(config_path) as ctx:
        result = ctx.feed_adapter().load(url, fmt)

    stats = compute_stats(result.entries)
    payload = result.to_dict()
    payload["stats"] = stats.to_dict()

    if result.is_sample:
        logger.warning(f"Loaded {stats.documents} sample entries ({result.error})")
    else:
        logger.info(f"Loaded {stats.documents} entries with {stats.changes} changes")

    if output:
        target = Path(output)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Entries written to %s", target)

    return payload
