"""Readiness segmentation rules: deterministic, no scoring.

Every interview lands in exactly one of four segments. The rules are an
ordered decision list; the first predicate that holds decides.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

from ..constants import (
    FRAUD_CONCERN_RE,
    FX_DEMAND_RE,
    HELPS_CUSTOMERS_RE,
    SEGMENT_META,
)
from ..schemas.founder_schema import ReadinessSegment
from ..schemas.interview_schema import Interview
from .field_normalizer import is_digital_method, normalize_payment_method


@dataclass(frozen=True)
class SegmentSignals:
    """Inputs the segment rules inspect."""

    demand: bool
    helps: bool
    digital_count: int
    fraud_concern: bool


SEGMENT_RULES: Tuple[Tuple[Callable[[SegmentSignals], bool], ReadinessSegment], ...] = (
    (lambda s: s.demand and s.helps and s.digital_count >= 2, "ready_now"),
    (lambda s: s.demand and (s.helps or s.digital_count >= 1), "promising_but_cautious"),
    (lambda s: not s.demand and s.digital_count >= 2, "digital_no_fx_yet"),
    (lambda s: s.fraud_concern and s.digital_count <= 1, "cash_first"),
)
DEFAULT_SEGMENT: ReadinessSegment = "cash_first"


def determine_segment(
    demand: bool,
    helps: bool,
    digital_count: int,
    fraud_concern: bool,
) -> ReadinessSegment:
    """Classify one interview's signals into a readiness segment."""
    signals = SegmentSignals(
        demand=demand,
        helps=helps,
        digital_count=digital_count,
        fraud_concern=fraud_concern,
    )
    for predicate, segment in SEGMENT_RULES:
        if predicate(signals):
            return segment
    return DEFAULT_SEGMENT


def derive_segment_signals(interview: Interview, respondent_transcript: str) -> SegmentSignals:
    """Combine structured survey flags with respondent transcript hits.

    Transcript evidence can upgrade a structured "no" but never downgrade
    a structured "yes".
    """
    digital_count = sum(
        1 for m in interview.payment_methods
        if is_digital_method(normalize_payment_method(m))
    )
    concern_text = "\n".join(
        (interview.concerns_before_starting, interview.current_problems, respondent_transcript)
    )
    return SegmentSignals(
        demand=interview.dollar_inquiry or bool(FX_DEMAND_RE.search(respondent_transcript)),
        helps=interview.customer_asked_for_help or bool(HELPS_CUSTOMERS_RE.search(respondent_transcript)),
        digital_count=digital_count,
        fraud_concern=bool(FRAUD_CONCERN_RE.search(concern_text)),
    )


def segment_label(segment: ReadinessSegment) -> str:
    return SEGMENT_META[segment]["label"]


def segment_description(segment: ReadinessSegment) -> str:
    return SEGMENT_META[segment]["description"]


def segment_color(segment: ReadinessSegment) -> str:
    return SEGMENT_META[segment]["color"]
