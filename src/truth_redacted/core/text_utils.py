"""Shared text processing utilities.

Consolidates the cleaning and URL helpers used by the feed adapter, the
redactor and the statistics code.
"""

import re
import html as htmllib
from typing import Optional
from urllib.parse import urlparse

MIN_DISPLAY_LENGTH = 10
SHORT_TEXT_SUFFIX = " [content redacted]"


def strip_markup(text: Optional[str]) -> Optional[str]:
    """Remove HTML tags and unescape entities in feed descriptions.

    RSS descriptions frequently carry inline HTML (links, paragraphs) that
    should not leak into the displayed snippets.

    Args:
        text: Text potentially containing HTML tags

    Returns:
        Cleaned text with tags removed and entities unescaped, or the input
        unchanged when it is empty/None

    Examples:
        >>> strip_markup("<p>Some text</p>")
        'Some text'
        >>> strip_markup("Text with &lt;angle&gt; brackets")
        'Text with <angle> brackets'
    """
    if not text:
        return text

    text = re.sub(r"<[^>]+>", "", text)
    return htmllib.unescape(text).strip()


def collapse_whitespace(text: Optional[str]) -> str:
    """Turn newlines into spaces and squeeze runs of whitespace."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text.replace("\n", " ")).strip()


def clean_text(text: Optional[str]) -> str:
    """Clean and format a snippet for display.

    Newlines become spaces, whitespace is collapsed, and very short results
    (under 10 characters) are padded with a "[content redacted]" marker so a
    fragment never renders as a bare word.

    Examples:
        >>> clean_text("  Budget\\n  cuts  ")
        'Budget cuts'
        >>> clean_text("Budget")
        'Budget [content redacted]'
        >>> clean_text("")
        ''
    """
    if not text:
        return ""

    cleaned = collapse_whitespace(text)
    if len(cleaned) < MIN_DISPLAY_LENGTH:
        cleaned += SHORT_TEXT_SUFFIX
    return cleaned


def extract_domain(url: Optional[str]) -> str:
    """Return the hostname of *url* without a leading ``www.``.

    Returns an empty string when *url* is not an absolute URL.

    Examples:
        >>> extract_domain("https://www.state.gov/briefings/")
        'state.gov'
        >>> extract_domain("not a url")
        ''
    """
    if not url:
        return ""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return ""
    if not parsed.scheme or not parsed.hostname:
        return ""
    return re.sub(r"^www\.", "", parsed.hostname)


def format_url(url: str) -> str:
    """Readable form of a URL: its domain, or the input when it cannot be parsed."""
    return extract_domain(url) or url


def word_count(text: Optional[str]) -> int:
    """Count space-separated words, the unit used by the redaction statistics."""
    if text is None:
        return 0
    return len(text.split(" "))
