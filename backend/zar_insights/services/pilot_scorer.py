"""Pilot Candidate Scorer.

Computes a 0-100 readiness score per interview and templated outreach
guidance for the founders' pilot list.

Rules
-----
- Additive integer points from ``PILOT_WEIGHTS``
- The rail bonus is either the multi-rail or the single-rail weight,
  never both, so the table peaks at exactly 100
- Score is clamped to [0, 100]
- Only candidates scoring >= 30 are kept, best first
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from ..constants import (
    APPROACH_FALLBACK,
    DIGITAL_RAIL_KEYWORDS,
    PILOT_MIN_SCORE,
    PILOT_WEIGHTS,
    RISK_FALLBACK,
    TRUST_CONCERN_RE,
    UNKNOWN,
)
from ..schemas.interview_schema import Interview
from ..schemas.validation_schema import (
    CandidateFactors,
    EnhancedPilotCandidate,
    TrustConcernLevel,
)


def _clamp(value: int, lo: int = 0, hi: int = 100) -> int:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def count_digital_rails(payment_methods: Sequence[str]) -> int:
    """Number of payment methods naming one of the digital rails."""
    return sum(
        1 for m in payment_methods
        if any(keyword in m.lower() for keyword in DIGITAL_RAIL_KEYWORDS)
    )


def determine_trust_concern_level(fraud_story: bool, concerns_text: str) -> TrustConcernLevel:
    if fraud_story:
        return "high"
    if TRUST_CONCERN_RE.search(concerns_text or ""):
        return "medium"
    return "low"


def compute_readiness_score(
    dollar_inquiry: bool,
    customer_asked_for_help: bool,
    digital_rail_count: int,
    fraud_story: bool,
    currently_refers: bool,
) -> int:
    score = 0
    if dollar_inquiry:
        score += PILOT_WEIGHTS["fx_demand"]
    if customer_asked_for_help:
        score += PILOT_WEIGHTS["helps_customers"]
    if digital_rail_count >= 2:
        score += PILOT_WEIGHTS["multiple_rails"]
    elif digital_rail_count == 1:
        score += PILOT_WEIGHTS["single_rail"]
    if not fraud_story:
        score += PILOT_WEIGHTS["no_fraud_story"]
    if currently_refers:
        score += PILOT_WEIGHTS["currently_refers"]
    return _clamp(score)


# ── Outreach templates: (condition, fragment), joined with spaces ─────

APPROACH_RULES: Tuple[Tuple[Callable[[CandidateFactors], bool], str], ...] = (
    (
        lambda f: f.has_fx_demand,
        "Lead with: 'We noticed your customers ask about foreign currency...'",
    ),
    (
        lambda f: f.helps_customers,
        "Acknowledge: 'You already help customers with transfers - this builds on that.'",
    ),
    (
        lambda f: f.trust_concern_level == "high",
        "Address trust: 'We provide proof-of-payment receipts and reversal protection.'",
    ),
    (
        lambda f: f.currently_refers,
        "Opportunity: 'Instead of referring to Western Union, you could earn commission.'",
    ),
)

# (fraud_story, trust_concern_level) -> fragment
RISK_RULES: Tuple[Tuple[Callable[[bool, str], bool], str], ...] = (
    (
        lambda fraud_story, level: fraud_story,
        "Show anti-fraud features: receipt generation, transaction limits, customer verification.",
    ),
    (
        lambda fraud_story, level: level == "high",
        "Offer pilot protection: guarantee against losses during trial period.",
    ),
    (
        lambda fraud_story, level: level == "medium",
        "Provide training on recognizing fraud patterns and using safety features.",
    ),
)


def generate_approach_script(factors: CandidateFactors) -> str:
    scripts = [fragment for condition, fragment in APPROACH_RULES if condition(factors)]
    return " ".join(scripts) if scripts else APPROACH_FALLBACK


def generate_risk_mitigation(trust_concern_level: TrustConcernLevel, fraud_story: bool) -> str:
    mitigations = [
        fragment for condition, fragment in RISK_RULES
        if condition(fraud_story, trust_concern_level)
    ]
    return " ".join(mitigations) if mitigations else RISK_FALLBACK


def score_pilot_candidate(interview: Interview) -> EnhancedPilotCandidate:
    """Score one interview regardless of the minimum-score cut."""
    digital_rail_count = count_digital_rails(interview.payment_methods)
    concerns_text = f"{interview.concerns_before_starting} {interview.current_problems}"
    trust_concern_level = determine_trust_concern_level(interview.fraud_story, concerns_text)
    currently_refers = len(interview.currency_exchange_referral) > 0

    factors = CandidateFactors(
        has_fx_demand=interview.dollar_inquiry,
        helps_customers=interview.customer_asked_for_help,
        digital_rail_count=digital_rail_count,
        trust_concern_level=trust_concern_level,
        currently_refers=currently_refers,
    )

    return EnhancedPilotCandidate(
        interview_id=interview.id,
        shop_type=interview.shop_type or UNKNOWN,
        location=interview.location or UNKNOWN,
        owner_age=interview.owner_age,
        daily_customers=interview.customers_per_day or UNKNOWN,
        readiness_score=compute_readiness_score(
            interview.dollar_inquiry,
            interview.customer_asked_for_help,
            digital_rail_count,
            interview.fraud_story,
            currently_refers,
        ),
        factors=factors,
        approach_script=generate_approach_script(factors),
        risk_mitigation=generate_risk_mitigation(trust_concern_level, interview.fraud_story),
    )


def compute_enhanced_pilot_candidates(
    interviews: Sequence[Interview],
) -> List[EnhancedPilotCandidate]:
    """Scored candidates with score >= 30, highest first (ties keep input order)."""
    candidates = [score_pilot_candidate(i) for i in interviews]
    kept = [c for c in candidates if c.readiness_score >= PILOT_MIN_SCORE]
    kept.sort(key=lambda c: c.readiness_score, reverse=True)
    return kept
