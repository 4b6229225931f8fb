"""Theme & bucket extractors.

Deterministic keyword/regex classifiers that bucket free text into the
founder taxonomy. All tables live in ``constants``.

Rules
-----
- NO LLMs, NO inference
- Single-label classifiers: ordered table, first match wins
- Multi-label classifiers: every row tested independently
- Transcript-derived signals use respondent speech only
"""

from __future__ import annotations

import re
from typing import List

from ..constants import (
    FRAUD_PATTERN_RULES,
    QUOTE_ELLIPSIS,
    QUOTE_MAX_LENGTH,
    RESPONDENT_LINE_RE,
    THEME_LINE_MIN_LENGTH,
    THEME_LINES_PER_THEME,
    THEME_PATTERNS,
    TRANSCRIPT_REFERRAL_RULES,
    WHY_NOT_FX_OTHER,
    WHY_NOT_FX_RULES,
    WHY_NOT_FX_UNKNOWN,
)


_LINE_BREAK_RE = re.compile(r"\r?\n")


def _non_empty_lines(text: str) -> List[str]:
    return [line.strip() for line in _LINE_BREAK_RE.split(text or "") if line.strip()]


def extract_respondent_lines(text: str) -> List[str]:
    """Lines spoken by the shopkeeper / owner / pharmacist."""
    return [line for line in _non_empty_lines(text) if RESPONDENT_LINE_RE.match(line)]


def respondent_only_text(text: str) -> str:
    """Respondent lines joined by newlines.

    Transcripts without speaker labels are returned unchanged.
    """
    lines = extract_respondent_lines(text)
    return "\n".join(lines) if lines else (text or "")


def bucket_why_not_handle_fx(text: str) -> str:
    """Single-label reason a merchant does not handle FX themselves."""
    t = (text or "").lower()
    if not t.strip():
        return WHY_NOT_FX_UNKNOWN
    for pattern, bucket in WHY_NOT_FX_RULES:
        if pattern.search(t):
            return bucket
    return WHY_NOT_FX_OTHER


def fraud_pattern_buckets_from_text(text: str) -> List[str]:
    """All fraud-pattern labels whose keywords appear in *text* (table order)."""
    t = (text or "").lower()
    buckets: List[str] = []
    for pattern, bucket in FRAUD_PATTERN_RULES:
        if pattern.search(t) and bucket not in buckets:
            buckets.append(bucket)
    return buckets


def _truncate_quote(line: str) -> str:
    if len(line) > QUOTE_MAX_LENGTH:
        return f"{line[:QUOTE_MAX_LENGTH - 3]}{QUOTE_ELLIPSIS}"
    return line


def extract_theme_lines(text: str, theme: str) -> List[str]:
    """Up to three respondent lines evidencing *theme*.

    Lines shorter than 12 characters are ignored; long lines are
    truncated to keep the evidence explorer scannable.
    """
    pattern = THEME_PATTERNS[theme]
    lines = [
        line
        for line in _non_empty_lines(respondent_only_text(text))
        if len(line) >= THEME_LINE_MIN_LENGTH
    ]
    hits = [line for line in lines if pattern.search(line)]
    return [_truncate_quote(line) for line in hits[:THEME_LINES_PER_THEME]]


def extract_referral_destinations_from_transcript(text: str) -> List[str]:
    """Canonical FX referral destinations mentioned by the respondent."""
    t = respondent_only_text(text).lower()
    destinations: List[str] = []
    for pattern, label in TRANSCRIPT_REFERRAL_RULES:
        if pattern.search(t) and label not in destinations:
            destinations.append(label)
    return destinations
