"""Survey Field Normalizer.

Canonicalizes inconsistent free-text survey fields (payment rails, shop
types, FX referral destinations) into controlled vocabularies.

Rules
-----
- Ordered substring tables from ``constants``, first match wins
- Matching runs on a lowercased copy of the input
- No match → whitespace-normalized original text
- Pure and deterministic
"""

from __future__ import annotations

from typing import Sequence, Tuple

from ..constants import (
    PAYMENT_METHOD_RULES,
    REFERRAL_DESTINATION_RULES,
    REFERRAL_EXACT_RULES,
    SHOP_TYPE_CORRECTIONS,
    UNKNOWN,
)
from .text_normalizer import normalize_whitespace


def first_substring_match(
    value: str,
    rules: Sequence[Tuple[str, str]],
) -> str | None:
    """Return the canonical label of the first rule whose keyword is in *value*."""
    for keyword, canonical in rules:
        if keyword in value:
            return canonical
    return None


def first_exact_match(
    value: str,
    rules: Sequence[Tuple[str, str]],
) -> str | None:
    for keyword, canonical in rules:
        if value == keyword:
            return canonical
    return None


def normalize_payment_method(method: str) -> str:
    """Map a payment method mention to a canonical rail name."""
    v = (method or "").strip().lower()
    if not v:
        return UNKNOWN
    return first_substring_match(v, PAYMENT_METHOD_RULES) or normalize_whitespace(method)


def normalize_shop_type(shop_type: str) -> str:
    """Fix the known shop-type typos; otherwise keep the trimmed original."""
    v = normalize_whitespace(shop_type).lower()
    if not v:
        return UNKNOWN
    return first_exact_match(v, SHOP_TYPE_CORRECTIONS) or shop_type.strip()


def normalize_referral_destination(value: str) -> str:
    """Map an FX referral destination to a canonical label.

    Empty input yields ``""`` so callers can filter it out.
    """
    v = (value or "").strip().lower()
    if not v:
        return ""
    return (
        first_substring_match(v, REFERRAL_DESTINATION_RULES)
        or first_exact_match(v, REFERRAL_EXACT_RULES)
        or normalize_whitespace(value)
    )


def is_digital_method(normalized_method: str) -> bool:
    """True for a normalized payment method that is neither cash nor unknown."""
    return normalized_method not in ("Cash", UNKNOWN)
