"""Willingness factors: what makes a new service feel safe to merchants."""

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from ..constants import WILLINGNESS_FACTOR_RULES
from ..schemas.interview_schema import Interview
from ..schemas.validation_schema import WillingnessFactor

_COMPILED_FACTORS = tuple(
    {**rule, "compiled": tuple(re.compile(p, re.IGNORECASE) for p in rule["patterns"])}
    for rule in WILLINGNESS_FACTOR_RULES
)


def extract_willingness_factors(interviews: Sequence[Interview]) -> List[WillingnessFactor]:
    """Count interviews mentioning each trust factor.

    Searches the trust-factors answer plus the embedded transcript. Factors
    nobody mentioned are dropped; the rest are sorted by mentions.
    """
    hits: Dict[str, List[str]] = {rule["factor"]: [] for rule in _COMPILED_FACTORS}

    for interview in interviews:
        search_text = f"{interview.trust_factors} {interview.transcript}".lower()
        for rule in _COMPILED_FACTORS:
            if any(p.search(search_text) for p in rule["compiled"]):
                ids = hits[rule["factor"]]
                if interview.id not in ids:
                    ids.append(interview.id)

    factors = [
        WillingnessFactor(
            factor=rule["factor"],
            mention_count=len(hits[rule["factor"]]),
            interview_ids=hits[rule["factor"]],
            actionability=rule["actionability"],
            suggested_action=rule["suggested_action"],
        )
        for rule in _COMPILED_FACTORS
    ]
    factors = [f for f in factors if f.mention_count > 0]
    factors.sort(key=lambda f: f.mention_count, reverse=True)
    return factors
