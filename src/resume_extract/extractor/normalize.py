"""Whitespace and control-character normalization for extracted text."""

from __future__ import annotations

import re

# C0 controls, DEL, and C1 controls. Tab/LF/CR are included and end up as
# plain spaces after whitespace collapsing.
_CONTROL_PATTERN = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Strip control characters, collapse whitespace runs, and trim.

    Idempotent: ``normalize_text(normalize_text(x)) == normalize_text(x)``.
    """
    if not text:
        return ""
    text = _CONTROL_PATTERN.sub(" ", text)
    return _WHITESPACE_PATTERN.sub(" ", text).strip()
