"""Validation Scorecard Engine.

Combines five dimension scores into a lean-startup verdict
(persevere / investigate / pivot / kill) with a confidence level.

Rules
-----
- NO weighting: the overall score is the plain mean of the dimensions
- Every ratio guards total == 0
- Pure deterministic math
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from ..constants import (
    CONFIDENCE_FLOOR,
    CONFIDENCE_THRESHOLDS,
    KNOWLEDGE_GAP_BUCKET,
    LEGAL_BUCKET,
    NEUTRAL_SCORE,
    PILOT_TARGET_COUNT,
    SIGNAL_FLOOR,
    SIGNAL_THRESHOLDS,
    VERDICT_RATIONALES,
)
from ..schemas.founder_schema import BarDatum, SegmentSummary
from ..schemas.validation_schema import (
    ConfidenceLevel,
    ValidationDimension,
    ValidationScorecard,
    ValidationSignal,
    ValidationVerdict,
)
from .text_normalizer import round_half_up


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def score_to_signal(score: float) -> ValidationSignal:
    for threshold, signal in SIGNAL_THRESHOLDS:
        if score >= threshold:
            return signal  # type: ignore[return-value]
    return SIGNAL_FLOOR  # type: ignore[return-value]


def compute_verdict(avg_score: float, problem_score: float) -> ValidationVerdict:
    """Decision table, first match wins."""
    if avg_score >= 65 and problem_score >= 60:
        return "persevere"
    if avg_score >= 45:
        return "investigate"
    if problem_score < 30:
        return "kill"
    return "pivot"


def compute_confidence(sample_size: int) -> ConfidenceLevel:
    for threshold, level in CONFIDENCE_THRESHOLDS:
        if sample_size >= threshold:
            return level  # type: ignore[return-value]
    return CONFIDENCE_FLOOR  # type: ignore[return-value]


def _bucket_value(buckets: Sequence[BarDatum], name: str) -> int:
    return next((b.value for b in buckets if b.name == name), 0)


def compute_validation_scorecard(
    total: int,
    fx_inquiry_count: int,
    segments: Sequence[SegmentSummary],
    why_not_handle_fx_buckets: Sequence[BarDatum],
    fraud_story_count: int,
    pilot_candidate_count: int,
) -> ValidationScorecard:
    """Score the five validation dimensions and derive the verdict.

    Parameters
    ----------
    total : int
        Sample size (number of interviews).
    fx_inquiry_count : int
        Interviews where a customer asked about dollars / foreign money.
    segments : Sequence[SegmentSummary]
        Readiness segments from the dashboard aggregate.
    why_not_handle_fx_buckets : Sequence[BarDatum]
        Why-not-FX distribution; only "Knowledge gap" and
        "Legal & compliance" are read.
    fraud_story_count : int
    pilot_candidate_count : int
        Number of pilot candidates; the target is three.
    """

    # 1. Problem: do customers ask for FX?
    problem_score = round_half_up(fx_inquiry_count / total * 100) if total > 0 else 0

    # 2. Willingness: ready + promising segments
    ready_count = sum(
        s.count for s in segments
        if s.segment in ("ready_now", "promising_but_cautious")
    )
    willingness_score = round_half_up(ready_count / total * 100) if total > 0 else 0

    # 3. Friction solvability: knowledge gaps are solvable, legal blocks are not
    knowledge_gap = _bucket_value(why_not_handle_fx_buckets, KNOWLEDGE_GAP_BUCKET)
    legal_block = _bucket_value(why_not_handle_fx_buckets, LEGAL_BUCKET)
    friction_score = (
        round_half_up(_clamp(((knowledge_gap - legal_block) / total + 0.5) * 100))
        if total > 0
        else NEUTRAL_SCORE
    )

    # 4. Trust buildable: inverse of the fraud-story rate
    trust_score = (
        round_half_up((total - fraud_story_count) / total * 100)
        if total > 0
        else NEUTRAL_SCORE
    )

    # 5. Pilot availability
    pilot_score = min(100, round_half_up(pilot_candidate_count / PILOT_TARGET_COUNT * 100))

    avg_score = (problem_score + willingness_score + friction_score + trust_score + pilot_score) / 5
    verdict = compute_verdict(avg_score, problem_score)

    primary_blocker = "knowledge gap" if knowledge_gap > legal_block else "legal concerns"
    dimensions = [
        ValidationDimension(
            id="problem",
            name="Problem Exists",
            score=problem_score,
            signal=score_to_signal(problem_score),
            summary=f"{fx_inquiry_count}/{total} ({problem_score}%) interviews show FX demand",
        ),
        ValidationDimension(
            id="willingness",
            name="Willingness to Act",
            score=willingness_score,
            signal=score_to_signal(willingness_score),
            summary=f"{ready_count}/{total} ({willingness_score}%) in ready/promising segments",
        ),
        ValidationDimension(
            id="friction",
            name="Friction Solvability",
            score=friction_score,
            signal=score_to_signal(friction_score),
            summary=f'Primary blocker is "{primary_blocker}" (addressable)',
        ),
        ValidationDimension(
            id="trust",
            name="Trust Buildable",
            score=trust_score,
            signal=score_to_signal(trust_score),
            summary=f"{total - fraud_story_count}/{total} ({trust_score}%) have no fraud stories",
        ),
        ValidationDimension(
            id="pilots",
            name="Pilot Availability",
            score=pilot_score,
            signal=score_to_signal(pilot_score),
            summary=f"{pilot_candidate_count} candidates identified (target: {PILOT_TARGET_COUNT}+)",
        ),
    ]

    return ValidationScorecard(
        overall_verdict=verdict,
        verdict_rationale=VERDICT_RATIONALES[verdict],
        confidence_level=compute_confidence(total),
        dimensions=dimensions,
        last_updated=datetime.now(timezone.utc).isoformat(),
    )
