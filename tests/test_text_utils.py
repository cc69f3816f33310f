import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from truth_redacted.core.text_utils import (  # noqa: E402
    clean_text,
    extract_domain,
    format_url,
    strip_markup,
    word_count,
)


def test_clean_text_collapses_whitespace_and_newlines():
    assert clean_text("  The memo\nwas   released\n\nyesterday ") == "The memo was released yesterday"


def test_clean_text_pads_short_fragments():
    assert clean_text("Budget") == "Budget [content redacted]"


def test_clean_text_empty():
    assert clean_text("") == ""
    assert clean_text(None) == ""


def test_strip_markup_removes_tags_and_entities():
    assert strip_markup("<p>Budget &amp; <b>policy</b></p>") == "Budget & policy"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.state.gov/briefings/", "state.gov"),
        ("http://data.gdeltproject.org/gdeltv3/gdg/", "data.gdeltproject.org"),
        ("state.gov/briefings", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_domain(url, expected):
    assert extract_domain(url) == expected


def test_format_url_falls_back_to_input():
    assert format_url("https://www.epa.gov/newsreleases") == "epa.gov"
    assert format_url("EPA newsroom") == "EPA newsroom"


def test_word_count_uses_single_spaces():
    assert word_count("Wait times increased") == 3
    assert word_count(None) == 0
