"""
Redact command implementation.
Applies the configured redaction word lists to a single snippet.
"""

from typing import Any, Dict, Optional

from ..core.command_context import CommandContext


def run(config_path: Optional[str], text: str, mode: Optional[str] = None) -> Dict[str, Any]:
    """Redact *text* with *mode* (defaults to ``redaction.mode``)."""
    with CommandContext(config_path) as ctx:
        redactor = ctx.redactor()
        mode = mode or ctx.get_setting('redaction', 'mode', 'soften')
    return {
        "original": text,
        "redacted": redactor.redact(text, mode),
        "mode": mode,
        "highlights": redactor.find_highlights(text),
    }
