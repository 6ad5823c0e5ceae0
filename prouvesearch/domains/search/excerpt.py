"""
Excerpt Generator - Bounded, word-boundary-safe preview snippets.

Every excerpt ends in the ellipsis marker or in sentence-terminal punctuation and
is at most ``max_length + len(ELLIPSIS)`` characters long.
"""

from __future__ import annotations

__all__ = ["ELLIPSIS", "TERMINAL_PUNCTUATION", "WORD_BOUNDARY_RATIO", "excerpt"]

ELLIPSIS = "..."
TERMINAL_PUNCTUATION = frozenset(".!?。！？")
WORD_BOUNDARY_RATIO = 0.8


def _is_cjk(char: str) -> bool:
    code = ord(char)
    return (
        0x3040 <= code <= 0x30FF  # kana
        or 0x3400 <= code <= 0x4DBF  # CJK extension A
        or 0x4E00 <= code <= 0x9FFF  # CJK unified ideographs
        or 0xAC00 <= code <= 0xD7AF  # hangul syllables
        or 0xFF00 <= code <= 0xFFEF  # full-width forms
    )


def _terminate(text: str) -> str:
    if text and text[-1] in TERMINAL_PUNCTUATION:
        return text
    if text.endswith(ELLIPSIS):
        return text
    if text and _is_cjk(text[-1]):
        return text + "。"
    return text + "."


def excerpt(text: str, max_length: int) -> str:
    """
    Bound ``text`` to ``max_length`` characters for previews.

    Longer text is cut at the last whitespace when that lies at or after 80% of
    ``max_length``, otherwise hard-cut at ``max_length``; either way the ellipsis
    marker is appended. Text that fits is returned as is, with a terminal period
    added when it lacks sentence-ending punctuation.

    Raises:
        ValueError: If max_length is negative
    """
    if max_length < 0:
        raise ValueError("max_length must not be negative")

    text = text.strip()
    if len(text) <= max_length:
        return _terminate(text)

    truncated = text[:max_length]
    boundary = max(
        (i for i, char in enumerate(truncated) if char.isspace()),
        default=-1,
    )
    if boundary >= max_length * WORD_BOUNDARY_RATIO:
        truncated = truncated[:boundary]
    return truncated.rstrip() + ELLIPSIS
