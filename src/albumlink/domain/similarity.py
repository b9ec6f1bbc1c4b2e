"""Text similarity used to rank fuzzy catalog search candidates."""

from __future__ import annotations

import re
from typing import Final

_PUNCTUATION: Final = re.compile(r"[^\w\s]")
_WHITESPACE: Final = re.compile(r"\s+")

EXACT_MATCH: Final[float] = 1.0
CONTAINMENT_MATCH: Final[float] = 0.8


def normalize_text(value: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace and trim."""

    lowered = value.lower()
    stripped = _PUNCTUATION.sub("", lowered)
    return _WHITESPACE.sub(" ", stripped).strip()


def similarity(a: str, b: str) -> float:
    """Score two strings in ``[0, 1]``.

    Equal after normalisation scores 1.0, containment of one in the other 0.8,
    anything else the Jaccard index of the two word sets. Empty input scores 0.0.
    """

    norm_a = normalize_text(a)
    norm_b = normalize_text(b)

    if not norm_a or not norm_b:
        return 0.0
    if norm_a == norm_b:
        return EXACT_MATCH
    if norm_a in norm_b or norm_b in norm_a:
        return CONTAINMENT_MATCH

    tokens_a = set(norm_a.split())
    tokens_b = set(norm_b.split())
    if not tokens_a or not tokens_b:
        return 0.0

    shared = len(tokens_a & tokens_b)
    union = len(tokens_a | tokens_b)
    return shared / union
