"""Founder Dashboard Aggregator.

Runs the whole founder-insights pipeline over one interview + transcript
snapshot and returns a single immutable ``FounderDashboardData``.

Pipeline
--------
  1. Match transcript files to interviews (once)
  2. Single pass over interviews accumulating distributions, segments,
     pilot candidates, evidence quotes and data-quality notes
  3. Finalize segments / distributions and template the narrative
  4. De-duplicate evidence quotes

``build_founder_dashboard_data`` is pure. ``get_founder_dashboard_data``
loads the inputs and memoizes the result for the life of the process.
"""

from __future__ import annotations

import functools
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..constants import (
    CASH_ONLY_RE,
    EVIDENCE_THEME_ORDER,
    MAX_DASHBOARD_PILOT_CANDIDATES,
    MAX_PILOT_REASONS,
    RECOMMENDED_EXPERIMENTS,
    SEGMENT_ORDER,
    UNKNOWN,
    UNKNOWN_LOCATION,
    UNKNOWN_SHOP,
)
from ..schemas.founder_schema import (
    BarDatum,
    EvidenceQuote,
    FounderDashboardData,
    PilotCandidate,
    RecommendedExperiment,
    SegmentSummary,
)
from ..schemas.interview_schema import Interview, TranscriptDocument
from ..schemas.validation_schema import FounderOverview, ValidationScorecard
from .field_normalizer import (
    normalize_payment_method,
    normalize_referral_destination,
    normalize_shop_type,
)
from .funnel_engine import compute_conversion_funnel
from .interview_loader import get_interviews
from .pilot_scorer import compute_enhanced_pilot_candidates
from .scoring_engine import compute_validation_scorecard
from .segmentation_engine import (
    derive_segment_signals,
    determine_segment,
    segment_color,
    segment_description,
    segment_label,
)
from .theme_extractor import (
    bucket_why_not_handle_fx,
    extract_referral_destinations_from_transcript,
    extract_theme_lines,
    fraud_pattern_buckets_from_text,
    respondent_only_text,
)
from .transcript_loader import get_transcript_documents
from .transcript_matcher import match_transcripts_to_interviews
from .willingness_factors import extract_willingness_factors

logger = logging.getLogger(__name__)


# ===================================================================== #
#  Helpers                                                                #
# ===================================================================== #

def build_source_label(interview: Interview) -> str:
    shop_type = interview.shop_type.strip() or UNKNOWN_SHOP
    location = interview.location.strip() or UNKNOWN_LOCATION
    return f"Interview #{interview.id} • {shop_type} • {location}"


def to_bar_data(counts: Counter, color: Optional[str] = None) -> List[BarDatum]:
    """Counter → BarDatum list, highest count first (ties keep first-seen order)."""
    data = [BarDatum(name=name, value=value, color=color) for name, value in counts.items()]
    data.sort(key=lambda d: d.value, reverse=True)
    return data


def _top_key(counts: Counter) -> Optional[str]:
    if not counts:
        return None
    return max(counts.items(), key=lambda kv: kv[1])[0]


def dedupe_evidence_quotes(quotes: Iterable[EvidenceQuote]) -> List[EvidenceQuote]:
    """Keep the first quote per (theme, source label, quote) triple."""
    seen: set[tuple[str, str, str]] = set()
    deduped: List[EvidenceQuote] = []
    for q in quotes:
        key = (q.theme, q.source_label, q.quote)
        if key in seen:
            continue
        seen.add(key)
        deduped.append(q)
    return deduped


def _pilot_reasons(
    demand: bool,
    helps: bool,
    digital_count: int,
    fraud_concern: bool,
    refers: bool,
) -> str:
    reasons: List[str] = []
    if demand:
        reasons.append("FX demand signal")
    if helps:
        reasons.append("already helps customers")
    if digital_count >= 2:
        reasons.append("multiple digital rails")
    if fraud_concern:
        reasons.append("needs trust controls")
    if refers:
        reasons.append("actively refers today")
    return ", ".join(reasons[:MAX_PILOT_REASONS])


def build_segments(segment_counts: Counter, total: int) -> List[SegmentSummary]:
    """All four segments in fixed order, including empty ones."""
    return [
        SegmentSummary(
            segment=segment,
            label=segment_label(segment),
            count=segment_counts.get(segment, 0),
            share=segment_counts.get(segment, 0) / total if total > 0 else 0.0,
            description=segment_description(segment),
            color=segment_color(segment),
        )
        for segment in SEGMENT_ORDER
    ]


# ===================================================================== #
#  Aggregation                                                            #
# ===================================================================== #

def build_founder_dashboard_data(
    interviews: Sequence[Interview],
    transcripts: Sequence[TranscriptDocument],
) -> FounderDashboardData:
    """Derive the founder dashboard from one interview + transcript snapshot."""
    transcript_by_interview_id = match_transcripts_to_interviews(transcripts, interviews)

    total = len(interviews)
    fx_inquiry_count = sum(1 for i in interviews if i.dollar_inquiry)
    help_request_count = sum(1 for i in interviews if i.customer_asked_for_help)
    fraud_story_count = sum(1 for i in interviews if i.fraud_story)

    busiest_counts: Counter = Counter()
    payment_counts: Counter = Counter()
    referral_counts: Counter = Counter()
    why_buckets: Counter = Counter()
    fraud_buckets: Counter = Counter()
    segment_counts: Counter = Counter()

    evidence_quotes: List[EvidenceQuote] = []
    pilot_candidates: List[PilotCandidate] = []
    data_quality_notes: List[str] = []
    shop_type_variants: Dict[str, List[str]] = {}

    for interview in interviews:
        transcript = transcript_by_interview_id.get(interview.id)
        respondent_transcript_text = respondent_only_text(transcript.text) if transcript else ""

        # Busiest time
        busiest_counts[interview.busiest_time.strip() or UNKNOWN] += 1

        # Payment methods
        for method in interview.payment_methods:
            payment_counts[normalize_payment_method(method)] += 1

        # Shop type normalization quality
        normalized_shop_type = normalize_shop_type(interview.shop_type)
        raw_shop_type = interview.shop_type.strip() or UNKNOWN
        variants = shop_type_variants.setdefault(normalized_shop_type, [])
        if raw_shop_type not in variants:
            variants.append(raw_shop_type)

        # FX referral destinations: structured + transcript extraction
        structured_refs = [
            dest
            for dest in (normalize_referral_destination(r) for r in interview.currency_exchange_referral)
            if dest
        ]
        transcript_refs = (
            extract_referral_destinations_from_transcript(transcript.text) if transcript else []
        )
        for dest in structured_refs + transcript_refs:
            referral_counts[dest] += 1

        # Why not handle FX
        why_raw = interview.why_refer_elsewhere.strip() or (transcript.text if transcript else "")
        why_buckets[bucket_why_not_handle_fx(why_raw)] += 1

        # Fraud patterns
        fraud_text = "\n".join(
            part
            for part in (
                interview.concerns_before_starting,
                interview.current_problems,
                interview.fraud_details or "",
                respondent_transcript_text,
            )
            if part
        )
        for bucket in fraud_pattern_buckets_from_text(fraud_text):
            fraud_buckets[bucket] += 1

        # Segment
        signals = derive_segment_signals(interview, respondent_transcript_text)
        segment = determine_segment(
            demand=signals.demand,
            helps=signals.helps,
            digital_count=signals.digital_count,
            fraud_concern=signals.fraud_concern,
        )
        segment_counts[segment] += 1

        if segment in ("ready_now", "promising_but_cautious"):
            label = " • ".join((
                interview.shop_type.strip() or UNKNOWN_SHOP,
                interview.location.strip() or UNKNOWN_LOCATION,
            ))
            pilot_candidates.append(PilotCandidate(
                interview_id=interview.id,
                label=label,
                reason=_pilot_reasons(
                    signals.demand,
                    signals.helps,
                    signals.digital_count,
                    signals.fraud_concern,
                    len(interview.currency_exchange_referral) > 0,
                ),
            ))

        # Evidence quotes (theme lines)
        source_label = build_source_label(interview)
        transcript_file_name = transcript.file_name if transcript else None
        quote_source = respondent_transcript_text if transcript else interview.transcript
        for theme in EVIDENCE_THEME_ORDER:
            for line in extract_theme_lines(quote_source, theme):
                evidence_quotes.append(EvidenceQuote(
                    theme=theme,
                    quote=line,
                    source_label=source_label,
                    interview_id=interview.id,
                    transcript_file_name=transcript_file_name,
                ))

        if CASH_ONLY_RE.search(", ".join(interview.payment_methods)) and len(interview.payment_methods) > 1:
            data_quality_notes.append(
                f"Interview #{interview.id}: “Cash only” appears alongside other payment "
                "methods; consider normalizing this field."
            )

    for normalized, variants in shop_type_variants.items():
        if len(variants) >= 2:
            data_quality_notes.append(
                f"Shop type normalization: multiple variants map to “{normalized}” "
                f"({', '.join(variants)})."
            )

    segments = build_segments(segment_counts, total)

    fx_top = _top_key(referral_counts)
    why_top = _top_key(why_buckets)
    fraud_top = _top_key(fraud_buckets)

    top_opportunities = [
        f"FX questions show up in {fx_inquiry_count}/{total} interviews; merchants currently "
        f"route customers to {fx_top or 'existing money changers'}.",
        f"{why_top or 'Knowledge gaps'} is the most common reason merchants don’t handle FX today.",
        "High overlap between “helping customers transfer” and FX demand suggests a "
        "merchant-assisted flow could work.",
    ]

    key_risks = [
        f"Fraud is a recurring narrative ({fraud_story_count}/{total} reported a real incident; "
        f"top pattern: {fraud_top or 'general fraud fear'}).",
        "Operational reliability issues (network delays, confirmations) can create loss events "
        "and distrust.",
        "Compliance ambiguity (“government/legal”) appears as a blocker; pilots need a clear "
        "policy + merchant script.",
    ]

    recommended_experiments = [
        RecommendedExperiment(
            title=e["title"],
            success_metric=e["successMetric"],
            why_now=e["whyNow"],
        )
        for e in RECOMMENDED_EXPERIMENTS
    ]

    deduped_quotes = dedupe_evidence_quotes(evidence_quotes)
    logger.info(
        "[DASHBOARD] %d interviews, %d transcripts matched, %d pilot candidates, %d quotes",
        total, len(transcript_by_interview_id), len(pilot_candidates), len(deduped_quotes),
    )

    return FounderDashboardData(
        total_interviews=total,
        fx_inquiry_count=fx_inquiry_count,
        help_request_count=help_request_count,
        fraud_story_count=fraud_story_count,
        busy_time_distribution=to_bar_data(busiest_counts),
        payment_method_mentions=to_bar_data(payment_counts),
        fx_referral_destinations=to_bar_data(referral_counts),
        why_not_handle_fx_buckets=to_bar_data(why_buckets),
        fraud_pattern_buckets=to_bar_data(fraud_buckets),
        segments=segments,
        top_opportunities=top_opportunities,
        key_risks=key_risks,
        recommended_experiments=recommended_experiments,
        pilot_candidates=pilot_candidates[:MAX_DASHBOARD_PILOT_CANDIDATES],
        evidence_quotes=deduped_quotes,
        data_quality_notes=data_quality_notes,
    )


def build_validation_scorecard(
    dashboard: FounderDashboardData,
    pilot_candidate_count: int,
) -> ValidationScorecard:
    """Scorecard from the dashboard counts; the pilot dimension uses the enhanced (>=30) candidates."""
    return compute_validation_scorecard(
        total=dashboard.total_interviews,
        fx_inquiry_count=dashboard.fx_inquiry_count,
        segments=dashboard.segments,
        why_not_handle_fx_buckets=dashboard.why_not_handle_fx_buckets,
        fraud_story_count=dashboard.fraud_story_count,
        pilot_candidate_count=pilot_candidate_count,
    )


def build_founder_overview(
    interviews: Sequence[Interview],
    dashboard: FounderDashboardData,
) -> FounderOverview:
    """Page-level composition: dashboard plus the validation framework views."""
    enhanced_candidates = compute_enhanced_pilot_candidates(interviews)
    scorecard = build_validation_scorecard(dashboard, len(enhanced_candidates))
    return FounderOverview(
        dashboard=dashboard,
        validation_scorecard=scorecard,
        conversion_funnel=compute_conversion_funnel(interviews),
        willingness_factors=extract_willingness_factors(interviews),
        enhanced_pilot_candidates=enhanced_candidates,
    )


# ===================================================================== #
#  Process-level entry points                                             #
# ===================================================================== #

@functools.lru_cache(maxsize=1)
def get_founder_dashboard_data() -> FounderDashboardData:
    """Compute-once dashboard for the static survey data of this process."""
    return build_founder_dashboard_data(get_interviews(), get_transcript_documents())


def get_founder_overview() -> FounderOverview:
    return build_founder_overview(get_interviews(), get_founder_dashboard_data())


def get_validation_scorecard() -> ValidationScorecard:
    candidates = compute_enhanced_pilot_candidates(get_interviews())
    return build_validation_scorecard(get_founder_dashboard_data(), len(candidates))


@functools.lru_cache(maxsize=1)
def get_transcript_matches() -> Dict[str, TranscriptDocument]:
    """Interview id → matched transcript file for the loaded snapshot."""
    return match_transcripts_to_interviews(get_transcript_documents(), get_interviews())


def clear_caches() -> None:
    """Drop every process-level cache (tests and data reloads)."""
    get_founder_dashboard_data.cache_clear()
    get_transcript_matches.cache_clear()
    get_interviews.cache_clear()
    get_transcript_documents.cache_clear()
