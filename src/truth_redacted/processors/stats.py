"""Entry statistics and the word-level diff tokens shown for each entry."""

import random
from typing import Iterable, List, Optional, Sequence

from ..core.models import DiffToken, Entry, Stats
from ..core.text_utils import word_count
from .redactor import DEFAULT_HIGHLIGHT_TERMS

SEPARATOR = "→"


def compute_stats(entries: Iterable[Entry]) -> Stats:
    """Count documents, changes and words of original text redacted away."""
    stats = Stats()
    for entry in entries:
        stats.documents += 1
        stats.changes += len(entry.changes)
        stats.words_redacted += sum(word_count(change.original) for change in entry.changes)
    return stats


def _is_highlighted(word: str, terms: Sequence[str]) -> bool:
    lowered = word.lower()
    return any(term in lowered for term in terms)


def build_diff_tokens(
    entry: Entry,
    highlight_terms: Optional[Sequence[str]] = None,
) -> List[DiffToken]:
    """Flatten an entry into display tokens.

    The first token names the source; every change then contributes its
    original words (``deleted``), an arrow separator (``info``) and its
    redacted words (``inserted``). Words containing a watch-list term are
    flagged for highlighting.
    """
    terms = [t.lower() for t in (DEFAULT_HIGHLIGHT_TERMS if highlight_terms is None else highlight_terms)]
    tokens = [DiffToken(f"Source: {entry.source or 'Government Document'}", "info")]

    for change in entry.changes:
        if not change.original or not change.redacted:
            continue
        for word in change.original.replace("\n", " ").split(" "):
            if word.strip():
                tokens.append(DiffToken(word, "deleted", _is_highlighted(word, terms)))
        tokens.append(DiffToken(SEPARATOR, "info"))
        for word in change.redacted.replace("\n", " ").split(" "):
            if word.strip():
                tokens.append(DiffToken(word, "inserted", _is_highlighted(word, terms)))

    return tokens


def pick_entry(entries: Sequence[Entry], rng: Optional[random.Random] = None) -> Optional[Entry]:
    """Random entry with at least one change, or None when there is none."""
    candidates = [entry for entry in entries if entry.changes]
    if not candidates:
        return None
    return (rng or random).choice(candidates)
