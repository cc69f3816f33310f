"""
Show command implementation.
Prints random entries as colored before/after blocks in the terminal.
"""

import logging
import random
import time
from typing import Dict, List, Optional, Sequence, Tuple

import click

from ..core.command_context import CommandContext
from ..core.models import DiffToken
from ..processors.stats import build_diff_tokens, compute_stats, pick_entry

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

HIGHLIGHT_COLOR: RGB = (255, 50, 50)

# kind -> foreground color per theme
THEMES: Dict[str, Dict[str, RGB]] = {
    "cyber": {"info": (0, 150, 255), "deleted": (200, 50, 50), "inserted": (100, 150, 200)},
    "matrix": {"info": (0, 255, 0), "deleted": (200, 255, 200), "inserted": (100, 200, 100)},
    "retro": {"info": (255, 150, 0), "deleted": (255, 200, 100), "inserted": (200, 150, 100)},
}
THEME_ORDER = tuple(THEMES)


def next_theme(current: str) -> str:
    """Theme following *current* in the cycle (cyber -> matrix -> retro -> cyber)."""
    try:
        index = THEME_ORDER.index(current)
    except ValueError:
        return THEME_ORDER[0]
    return THEME_ORDER[(index + 1) % len(THEME_ORDER)]


def render_tokens(tokens: Sequence[DiffToken], theme: str = "cyber", color: bool = True) -> str:
    """Render diff tokens as one block: source line, then the words.

    Deleted words are struck through; highlighted words are bold red.
    """
    palette = THEMES.get(theme, THEMES["cyber"])
    if not tokens:
        return "[Empty diff block]"

    lines: List[str] = []
    words: List[str] = []
    for index, token in enumerate(tokens):
        if not color:
            text = f"~{token.word}~" if token.kind == "deleted" else token.word
        else:
            fg = HIGHLIGHT_COLOR if token.highlight else palette.get(token.kind, (200, 200, 200))
            text = click.style(
                token.word,
                fg=fg,
                bold=token.highlight,
                strikethrough=token.kind == "deleted",
            )
        if index == 0 and token.kind == "info":
            lines.append(text)
        else:
            words.append(text)
    if words:
        lines.append(" ".join(words))
    return "\n".join(lines)


def run(
    config_path: Optional[str],
    count: int = 5,
    theme: str = "cyber",
    interval: float = 0.0,
    seed: Optional[int] = None,
    cycle_themes: bool = False,
    color: bool = True,
) -> List[str]:
    """Load the feed and print *count* random entries.

    Returns:
        The rendered blocks, in print order
    """
    rng = random.Random(seed)

    with CommandContext(config_path) as ctx:
        result = ctx.feed_adapter().load()
        highlight_terms = ctx.redactor().highlight_terms

    stats = compute_stats(result.entries)
    header = (
        f"Documents: {stats.documents} | Changes: {stats.changes} | "
        f"Words Redacted: {stats.words_redacted}"
    )
    if result.is_sample:
        header += " (sample data)"
    click.echo(header)

    blocks: List[str] = []
    for i in range(max(0, count)):
        entry = pick_entry(result.entries, rng)
        if entry is None:
            logger.warning("No entries with changes to display")
            break
        block = render_tokens(build_diff_tokens(entry, highlight_terms), theme, color)
        blocks.append(block)
        click.echo("")
        click.echo(block)
        if cycle_themes:
            theme = next_theme(theme)
        if interval > 0 and i < count - 1:
            time.sleep(interval)
    return blocks
