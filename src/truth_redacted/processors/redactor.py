"""
Redaction heuristics.

Two variants share one set of word lists:

* ``soften`` rewrites the sensitive parts of a sentence into vaguer
  paraphrases (numbers become "several", places become "the region",
  strong words become weaker ones);
* ``mask`` blanks every sensitive match out with a placeholder.
"""

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "█████"

DEFAULT_LOCATIONS = (
    "Afghanistan", "Iraq", "Syria", "Yemen", "Libya", "Ukraine", "Russia", "China",
)

DEFAULT_REPLACEMENTS = {
    "crisis": "situation",
    "disaster": "event",
    "catastrophic": "significant",
    "failed": "did not meet expectations",
    "corruption": "irregularities",
    "violated": "may not have followed",
    "illegal": "questionable",
    "dangerous": "concerning",
}

# Watch-list words flagged when displayed
DEFAULT_HIGHLIGHT_TERMS = (
    "classified", "confidential", "secret", "redacted", "transparency",
    "corruption", "casualties", "failure", "crisis", "violation",
    "unauthorized", "error", "mistake", "disaster", "evidence",
)

PERCENT_PATTERN = re.compile(r"\b\d+(?:[.,]\d+)*%")
NUMBER_PATTERN = re.compile(r"\b\d+(?:[.,]\d+)*\b")

PERCENT_PARAPHRASE = "a percentage"
NUMBER_PARAPHRASE = "several"
LOCATION_PARAPHRASE = "the region"

MODES = ("soften", "mask")


def _word_pattern(words: Iterable[str]) -> Optional[re.Pattern]:
    """Compile a case-insensitive whole-word alternation, longest words first."""
    cleaned = sorted({w.strip() for w in words if w and w.strip()}, key=len, reverse=True)
    if not cleaned:
        return None
    alternation = "|".join(re.escape(w) for w in cleaned)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


class Redactor:
    """Pattern-based redaction of short document snippets.

    Args:
        locations: Place names softened to "the region"
        replacements: Strong word -> weaker word mapping
        sensitive_terms: Extra terms blanked out by :meth:`mask`; defaults to
            the highlight watch list
        highlight_terms: Watch-list words reported by :meth:`find_highlights`
        placeholder: Replacement used by :meth:`mask`
    """

    def __init__(
        self,
        locations: Optional[Iterable[str]] = None,
        replacements: Optional[Mapping[str, str]] = None,
        sensitive_terms: Optional[Iterable[str]] = None,
        highlight_terms: Optional[Iterable[str]] = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ):
        self.locations: List[str] = list(DEFAULT_LOCATIONS if locations is None else locations)
        source = DEFAULT_REPLACEMENTS if replacements is None else replacements
        self.replacements: Dict[str, str] = {k.strip().lower(): v for k, v in source.items() if k.strip()}
        self.highlight_terms: List[str] = list(
            DEFAULT_HIGHLIGHT_TERMS if highlight_terms is None else highlight_terms
        )
        self.sensitive_terms: List[str] = list(
            self.highlight_terms if sensitive_terms is None else sensitive_terms
        )
        self.placeholder = placeholder

        self._location_re = _word_pattern(self.locations)
        self._strong_re = _word_pattern(self.replacements)
        self._highlight_re = _word_pattern(self.highlight_terms)
        words_re = _word_pattern(self.locations + list(self.replacements) + self.sensitive_terms)
        # Single pass so a placeholder is never re-matched by a later pattern
        alternatives = [PERCENT_PATTERN.pattern, NUMBER_PATTERN.pattern]
        if words_re is not None:
            alternatives.append(words_re.pattern)
        self._mask_re = re.compile("|".join(alternatives), re.IGNORECASE)

    def soften(self, text: str) -> str:
        """Replace specific details with vaguer paraphrases.

        Percentages go first so that "15%" reads "a percentage" rather than
        "several%"; then bare numbers, locations and strong words.

        Examples:
            >>> Redactor().soften("Test scores show a 15% decline in 12 states.")
            'Test scores show a a percentage decline in several states.'
            >>> Redactor().soften("A catastrophic crisis in Syria")
            'A significant situation in the region'
        """
        if not text:
            return text

        redacted = PERCENT_PATTERN.sub(PERCENT_PARAPHRASE, text)
        redacted = NUMBER_PATTERN.sub(NUMBER_PARAPHRASE, redacted)
        if self._location_re is not None:
            redacted = self._location_re.sub(LOCATION_PARAPHRASE, redacted)
        if self._strong_re is not None:
            redacted = self._strong_re.sub(
                lambda m: self.replacements[m.group(0).lower()], redacted
            )
        return redacted

    def mask(self, text: str) -> str:
        """Blank out numbers, places, strong words and sensitive terms.

        Examples:
            >>> Redactor(placeholder="[X]").mask("Evidence of 37 deaths in Yemen")
            '[X] of [X] deaths in [X]'
        """
        if not text:
            return text

        return self._mask_re.sub(lambda _m: self.placeholder, text)

    def redact(self, text: str, mode: str = "soften") -> str:
        """Apply the redaction variant named by *mode* (``soften`` or ``mask``)."""
        if mode == "soften":
            return self.soften(text)
        if mode == "mask":
            return self.mask(text)
        raise ValueError(f"Unknown redaction mode '{mode}' (expected one of {', '.join(MODES)})")

    def find_highlights(self, text: str) -> List[str]:
        """Return the watch-list words found in *text*, lowercased, in order of appearance."""
        if not text or self._highlight_re is None:
            return []
        seen: List[str] = []
        for match in self._highlight_re.finditer(text):
            word = match.group(0).lower()
            if word not in seen:
                seen.append(word)
        return seen


_default = Redactor()


def soften(text: str) -> str:
    return _default.soften(text)


def mask(text: str) -> str:
    return _default.mask(text)


def find_highlights(text: str) -> List[str]:
    return _default.find_highlights(text)
