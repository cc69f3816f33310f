import random
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from truth_redacted.commands.show import next_theme, render_tokens  # noqa: E402
from truth_redacted.core.models import Change, Entry  # noqa: E402
from truth_redacted.processors.sample_data import get_sample_entries  # noqa: E402
from truth_redacted.processors.stats import build_diff_tokens, compute_stats, pick_entry  # noqa: E402
from truth_redacted.processors.synthetic import original_text_for, redacted_text_for  # noqa: E402


def test_compute_stats_on_sample_data():
    stats = compute_stats(get_sample_entries())
    assert stats.documents == 10
    assert stats.changes == 10
    assert stats.words_redacted == sum(
        len(change.original.split(" ")) for entry in get_sample_entries() for change in entry.changes
    )


def test_compute_stats_empty():
    assert compute_stats([]).to_dict() == {"documents": 0, "changes": 0, "words_redacted": 0}


def test_build_diff_tokens_layout():
    entry = Entry("CDC", [Change("Outbreak  crisis\ngrows", "Cases monitored")])
    tokens = build_diff_tokens(entry)

    assert [(t.word, t.kind) for t in tokens] == [
        ("Source: CDC", "info"),
        ("Outbreak", "deleted"),
        ("crisis", "deleted"),
        ("grows", "deleted"),
        ("→", "info"),
        ("Cases", "inserted"),
        ("monitored", "inserted"),
    ]
    assert [t.word for t in tokens if t.highlight] == ["crisis"]


def test_pick_entry_skips_entries_without_changes():
    entries = [Entry("empty"), Entry("full", [Change("a b c d", "e f")])]
    assert pick_entry(entries, random.Random(1)).source == "full"
    assert pick_entry([Entry("empty")]) is None


def test_synthetic_text_mentions_domain():
    rng = random.Random(3)
    assert "nasa.gov" in original_text_for("https://www.nasa.gov/news", rng)
    assert "nasa.gov" in redacted_text_for("https://www.nasa.gov/news", rng)


def test_render_tokens_plain():
    entry = Entry("VA", [Change("Wait times rose", "Scheduling optimized")])
    block = render_tokens(build_diff_tokens(entry), "matrix", color=False)
    assert block == "Source: VA\n~Wait~ ~times~ ~rose~ → Scheduling optimized"


def test_render_tokens_empty_block():
    assert render_tokens([], color=False) == "[Empty diff block]"


def test_next_theme_cycles():
    assert next_theme("cyber") == "matrix"
    assert next_theme("matrix") == "retro"
    assert next_theme("retro") == "cyber"
    assert next_theme("unknown") == "cyber"


def test_sample_entries_are_fresh_copies():
    first = get_sample_entries()
    first[0].changes.clear()
    first[0].source = "edited"

    second = get_sample_entries()
    assert second[0].source == "White House Press Release"
    assert len(second[0].changes) == 1
