"""
GDG snapshot download.

GDELT publishes the Government Document Graph as gzipped JSON every fifteen
minutes; snapshots are named after their UTC timestamp.
"""

import datetime
import gzip
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from ..core.http_client import RetryableHTTPClient

logger = logging.getLogger(__name__)

SNAPSHOT_URL_TEMPLATE = "https://data.gdeltproject.org/gdeltv3/gdg/{timestamp}.gdg.v3.json.gz"
SNAPSHOT_INTERVAL_MINUTES = 15


def snapshot_timestamp(now: Optional[datetime.datetime] = None) -> str:
    """``YYYYMMDDHHMM00`` for *now* (UTC), minutes floored to the quarter hour.

    Examples:
        >>> snapshot_timestamp(datetime.datetime(2024, 3, 5, 9, 44, 12, tzinfo=datetime.timezone.utc))
        '20240305093000'
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(datetime.timezone.utc)
    minute = (now.minute // SNAPSHOT_INTERVAL_MINUTES) * SNAPSHOT_INTERVAL_MINUTES
    return f"{now:%Y%m%d%H}{minute:02d}00"


def snapshot_url(now: Optional[datetime.datetime] = None) -> str:
    return SNAPSHOT_URL_TEMPLATE.format(timestamp=snapshot_timestamp(now))


def parse_json_document(text: str) -> Any:
    """Parse a JSON document; newline-delimited JSON becomes a list of records."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        records: List[Any] = []
        for line in text.splitlines():
            line = line.strip()
            if line:
                records.append(json.loads(line))
        return records


def fetch_gzipped_json(url: str, http_client: Optional[RetryableHTTPClient] = None) -> Any:
    """Download *url*, gunzip it and parse the JSON inside.

    Raises:
        requests.RequestException: on network/HTTP failures
        OSError: when the body is not valid gzip data
        ValueError: when the decompressed body is not JSON
    """
    client = http_client or RetryableHTTPClient()
    body = client.fetch_bytes(url)
    text = gzip.decompress(body).decode("utf-8")
    return parse_json_document(text)


def download_snapshot(
    url: Optional[str] = None,
    output: Optional[str] = None,
    http_client: Optional[RetryableHTTPClient] = None,
) -> Any:
    """Fetch a GDG snapshot and, when *output* is given, save it as pretty JSON.

    Args:
        url: Snapshot URL; defaults to the snapshot for the current quarter hour
        output: Destination file path (optional)
        http_client: Client to use (optional)

    Returns:
        The parsed snapshot data
    """
    url = url or snapshot_url()
    logger.info("Fetching GDELT data from: %s", url)
    try:
        data = fetch_gzipped_json(url, http_client)
    except Exception as e:
        logger.error(f"Error downloading GDELT data: {e}")
        raise
    logger.info("Successfully fetched and parsed GDELT data")

    if output:
        target = Path(output)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Data saved to %s", target)
    return data
