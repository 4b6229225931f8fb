"""Text normalization primitives shared by the whole pipeline.

Pure functions, no I/O.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, List

from ..constants import MIN_TOKEN_LENGTH, STOPWORDS

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", value or "").strip()


def tokenize_for_match(text: str) -> List[str]:
    """Tokenize *text* for transcript matching.

    Lowercases, replaces anything that is not ``[a-z0-9]`` or whitespace
    with a space, then drops short tokens, stopwords and pure numbers.
    Order and duplicates are preserved.
    """
    raw = _NON_ALNUM_RE.sub(" ", normalize_whitespace(text).lower())
    return [
        token
        for token in raw.split()
        if len(token) >= MIN_TOKEN_LENGTH
        and token not in STOPWORDS
        and not token.isdigit()
    ]


def jaccard_similarity(a_tokens: Iterable[str], b_tokens: Iterable[str]) -> float:
    """|A ∩ B| / |A ∪ B| over the token sets; 0 when either side is empty."""
    a_set = set(a_tokens)
    b_set = set(b_tokens)
    if not a_set or not b_set:
        return 0.0
    intersection = len(a_set & b_set)
    union = len(a_set) + len(b_set) - intersection
    return intersection / union if union > 0 else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (dashboard rounding)."""
    return math.floor(value + 0.5)
