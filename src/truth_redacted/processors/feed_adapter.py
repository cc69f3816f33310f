"""
Feed normalization.

Fetches a document feed and adapts whatever shape it has (RSS/XML, a JSON
article list, or newline-delimited GDG records) into ``Entry`` objects.
Any failure falls back to the bundled sample entries.
"""

import gzip
import io
import json
import logging
import random
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
from urllib.parse import unquote, urlparse

import feedparser

from ..core.config import ConfigManager, word_lists
from ..core.http_client import RetryableHTTPClient
from ..core.models import Change, Entry, FeedResult
from ..core.text_utils import clean_text, collapse_whitespace, extract_domain, format_url, strip_markup
from .redactor import Redactor
from .sample_data import get_sample_entries
from .synthetic import original_text_for

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100
DEFAULT_MIN_ENTRIES = 1
DEFAULT_SOURCE = "Government Document"
RSS_FALLBACK_SOURCE = "GDELT Project"
GDG_PAIR_SOURCE = "GDELT Project"
GDG_CONTENT_SOURCE = "GDELT Content"

# Fields searched, in order, for article text worth redacting
TEXT_FIELDS = ('content', 'text', 'body', 'description', 'summary', 'title')
# Keys under which JSON documents commonly nest their record list
LIST_KEYS = ('entries', 'articles', 'items', 'results', 'data')

MIN_DESCRIPTION_LENGTH = 20
MIN_TITLE_LENGTH = 10
MIN_FIELD_LENGTH = 20

DESCRIPTION_SPLIT_RE = re.compile(r"\s*-\s*|\s*:\s*")
FROM_TO_RE = re.compile(r'"from"\s*:\s*"([^"]+)"\s*,\s*"to"\s*:\s*"([^"]+)"')
LONG_STRING_RE = re.compile(r'"([^"]{50,})"')

GZIP_MAGIC = b"\x1f\x8b"


class FeedError(Exception):
    """Raised when a feed payload yields no usable entries."""


def unwrap_payload(payload: Union[bytes, str]) -> bytes:
    """Return the raw bytes of *payload*, gunzipping it when it is gzip data."""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if payload[:2] == GZIP_MAGIC:
        return gzip.decompress(payload)
    return payload


def decode_payload(payload: Union[bytes, str]) -> str:
    """Return text for *payload* (gunzipped, UTF-8, without a byte order mark)."""
    if isinstance(payload, str):
        return payload.lstrip("\ufeff")
    return unwrap_payload(payload).decode("utf-8", errors="replace").lstrip("\ufeff")


class FeedAdapter:
    """Fetches a feed and normalizes it into entries of original/redacted pairs."""

    def __init__(
        self,
        redactor: Optional[Redactor] = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        min_entries: int = DEFAULT_MIN_ENTRIES,
        pairing: str = "redact",
        http_client: Optional[RetryableHTTPClient] = None,
        *,
        url: Optional[str] = None,
        fmt: str = "auto",
        mode: str = "soften",
        rng: Optional[random.Random] = None,
    ):
        self.redactor = redactor or Redactor()
        self.url = url
        self.fmt = fmt
        self.mode = mode
        self.pairing = pairing
        self.max_entries = max_entries
        self.min_entries = min_entries
        self.http = http_client
        self.rng = rng or random.Random()

    @classmethod
    def from_config(
        cls,
        config_manager: ConfigManager,
        http_client: Optional[RetryableHTTPClient] = None,
    ) -> "FeedAdapter":
        """Build an adapter from the ``feed`` and ``redaction`` config sections."""
        feed_cfg = config_manager.get_feed_config()
        redaction_cfg = config_manager.get_redaction_config()
        return cls(
            Redactor(**word_lists(redaction_cfg)),
            url=feed_cfg.get('url'),
            fmt=feed_cfg.get('format', 'auto'),
            mode=redaction_cfg.get('mode', 'soften'),
            pairing=feed_cfg.get('pairing', 'redact'),
            max_entries=int(feed_cfg.get('max_entries', DEFAULT_MAX_ENTRIES)),
            min_entries=int(feed_cfg.get('min_entries', DEFAULT_MIN_ENTRIES)),
            http_client=http_client or RetryableHTTPClient.from_config(feed_cfg),
        )

    # ------------------------------------------------------------------ loading

    def load(self, url: Optional[str] = None, fmt: Optional[str] = None) -> FeedResult:
        """Fetch and normalize a feed; fall back to sample data on any failure.

        Args:
            url: Feed location (http(s) URL, file:// URL or local path);
                defaults to the configured feed URL
            fmt: ``auto``, ``rss``, ``json`` or ``gdg``; defaults to the
                configured format

        Returns:
            FeedResult with ``origin="live"`` on success, ``origin="sample"``
            (and the triggering error) otherwise
        """
        location = url or self.url
        fmt = fmt or self.fmt
        if not location:
            return self._fallback(None, "No feed URL configured")

        logger.info("Loading feed from %s", location)
        try:
            payload = self._read(location)
            entries = self.parse(payload, fmt)
            if len(entries) < self.min_entries:
                raise FeedError(
                    f"Only {len(entries)} usable entries extracted (need at least {self.min_entries})"
                )
        except Exception as e:
            logger.error(f"Could not load feed '{location}': {e}")
            return self._fallback(location, str(e))

        logger.info(f"Successfully processed {len(entries)} entries from {location}")
        return FeedResult(entries=entries, origin="live", url=location)

    def _read(self, location: str) -> bytes:
        parsed = urlparse(location)
        if parsed.scheme in ("http", "https"):
            if self.http is None:
                self.http = RetryableHTTPClient()
            return self.http.fetch_bytes(location)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path)).read_bytes()
        return Path(location).expanduser().read_bytes()

    def _fallback(self, location: Optional[str], error: str) -> FeedResult:
        logger.warning("Using sample data (%s)", error)
        return FeedResult(entries=get_sample_entries(), origin="sample", url=location, error=error)

    # ------------------------------------------------------------------ parsing

    def parse(self, payload: Union[bytes, str], fmt: str = "auto") -> List[Entry]:
        """Normalize a raw payload into entries.

        Raises:
            FeedError: if the payload yields no usable entries
            ValueError: on an unknown format name
        """
        raw = unwrap_payload(payload)
        text = decode_payload(raw)
        if fmt == "auto":
            fmt = self.detect_format(text)
            logger.debug("Detected feed format '%s'", fmt)

        if fmt == "rss":
            entries = self.parse_rss(raw)
        elif fmt == "json":
            entries = self.parse_articles(json.loads(text))
        elif fmt == "gdg":
            entries = self.parse_gdg(text)
        else:
            raise ValueError(f"Unknown feed format '{fmt}'")

        if not entries:
            raise FeedError(f"No valid entries could be extracted ({fmt})")
        return entries

    @staticmethod
    def detect_format(text: str) -> str:
        stripped = text.lstrip()
        if stripped.startswith("<"):
            return "rss"
        try:
            json.loads(stripped)
        except ValueError:
            return "gdg"
        return "json"

    def parse_rss(self, document: Union[bytes, str]) -> List[Entry]:
        """Normalize RSS/Atom items (feedparser) into entries."""
        if isinstance(document, str):
            document = document.encode("utf-8")
        # A stream keeps feedparser from treating the document as a URL or path
        feed = feedparser.parse(io.BytesIO(document))
        if feed.bozo and not feed.entries:
            raise FeedError(f"Feed could not be parsed: {feed.bozo_exception}")

        items = feed.entries
        logger.info(f"Found {len(items)} items in the feed")

        entries: List[Entry] = []
        for index, item in enumerate(items):
            if len(entries) >= self.max_entries:
                break
            try:
                entry = self._entry_from_item(item)
            except Exception as e:
                logger.warning(f"Error processing item {index}: {e}")
                continue
            if entry is not None:
                self.add_entry(entries, entry)
        return entries

    def _entry_from_item(self, item: Dict[str, Any]) -> Optional[Entry]:
        link = (item.get('link') or '').strip()
        title = collapse_whitespace(strip_markup(item.get('title') or ''))
        description = collapse_whitespace(
            strip_markup(item.get('summary') or item.get('description') or '')
        )
        entry = Entry(source=extract_domain(link) or title or RSS_FALLBACK_SOURCE, id=item.get('id'))

        if self.pairing == "split":
            parts = DESCRIPTION_SPLIT_RE.split(description) if description else []
            if len(parts) >= 2:
                entry.changes.append(Change(clean_text(parts[0]), clean_text(" ".join(parts[1:]))))
            if not entry.changes and link:
                original = original_text_for(link, self.rng)
                entry.changes.append(Change(original, self.redact(original)))
            return entry

        if len(description) > MIN_DESCRIPTION_LENGTH:
            original = description
        elif len(title) > MIN_TITLE_LENGTH:
            original = title
        else:
            original = original_text_for(link, self.rng)
        entry.changes.append(Change(original, self.redact(original)))
        return entry

    def parse_articles(self, data: Any) -> List[Entry]:
        """Normalize a JSON article list (or an already normalized document)."""
        entries: List[Entry] = []
        for record in self._records(data):
            if len(entries) >= self.max_entries:
                break
            entry = self.entry_from_record(record)
            if entry is not None:
                self.add_entry(entries, entry)
        return entries

    @staticmethod
    def _records(data: Any) -> Iterable[Dict[str, Any]]:
        if isinstance(data, dict):
            for key in LIST_KEYS:
                if isinstance(data.get(key), list):
                    data = data[key]
                    break
            else:
                data = [data]
        if not isinstance(data, list):
            return []
        return [record for record in data if isinstance(record, dict)]

    def entry_from_record(self, record: Dict[str, Any]) -> Optional[Entry]:
        """Build an entry from one JSON record, or None when it has nothing usable."""
        record_id = record.get('id')
        entry_id = str(record_id) if record_id is not None else None
        source = self.extract_source(record)

        if isinstance(record.get('changes'), list):
            entry = Entry.from_dict(record)
            entry.source = source
            return entry

        if isinstance(record.get('from'), str) and isinstance(record.get('to'), str):
            change = Change(clean_text(record['from']), clean_text(record['to']))
            return Entry(source=source, changes=[change], id=entry_id)

        for field in TEXT_FIELDS:
            value = record.get(field)
            if not isinstance(value, str):
                continue
            original = collapse_whitespace(strip_markup(value))
            if len(original) <= MIN_FIELD_LENGTH:
                continue
            redacted = self.redact(original)
            if redacted != original:
                return Entry(source=source, changes=[Change(original, redacted)], id=entry_id)
        return None

    @staticmethod
    def extract_source(record: Dict[str, Any]) -> str:
        """Most specific source description available on a record."""
        source = record.get('source')
        if isinstance(source, dict):
            source = source.get('name') or source.get('title')
        if isinstance(source, str) and source.strip():
            return source.strip()
        for key in ('page_url', 'url'):
            if isinstance(record.get(key), str) and record[key].strip():
                return format_url(record[key].strip())
        for key in ('organization', 'department'):
            if isinstance(record.get(key), str) and record[key].strip():
                return record[key].strip()
        return DEFAULT_SOURCE

    def parse_gdg(self, text: str) -> List[Entry]:
        """Normalize newline-delimited GDG data.

        JSON lines are handled like article records; anything else is scanned
        for ``"from"/"to"`` pairs and long quoted strings.
        """
        entries: List[Entry] = []
        for line in text.splitlines():
            if len(entries) >= self.max_entries:
                break
            line = line.strip()
            if not line:
                continue
            try:
                parsed = json.loads(line)
            except ValueError:
                self._scan_line(entries, line)
                continue
            for record in self._records(parsed):
                entry = self.entry_from_record(record)
                if entry is not None:
                    self.add_entry(entries, entry)
        return entries

    def _scan_line(self, entries: List[Entry], line: str) -> None:
        for match in FROM_TO_RE.finditer(line):
            self.add_entry(entries, Entry(
                source=GDG_PAIR_SOURCE,
                changes=[Change(clean_text(match.group(1)), clean_text(match.group(2)))],
            ))

        for match in LONG_STRING_RE.finditer(line):
            original = match.group(1)
            redacted = self.redact(original)
            if redacted != original:
                self.add_entry(entries, Entry(source=GDG_CONTENT_SOURCE, changes=[Change(original, redacted)]))

    # ------------------------------------------------------------------ helpers

    def redact(self, text: str) -> str:
        return self.redactor.redact(text, self.mode)

    def add_entry(self, entries: List[Entry], entry: Entry) -> bool:
        """Append *entry* if there is room and it keeps at least one valid change."""
        if len(entries) >= self.max_entries:
            return False
        entry.changes = [change for change in entry.changes if change.is_valid()]
        if not entry.changes:
            return False
        entries.append(entry)
        return True
