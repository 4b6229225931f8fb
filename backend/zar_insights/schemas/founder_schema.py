from typing import List, Literal, Optional

from pydantic import Field

from .interview_schema import CamelModel

FounderTheme = Literal[
    "fx_demand",
    "fx_referral",
    "customer_support",
    "fraud",
    "trust",
    "compliance",
    "payments",
]

ReadinessSegment = Literal[
    "ready_now",
    "promising_but_cautious",
    "digital_no_fx_yet",
    "cash_first",
]


class BarDatum(CamelModel):
    """Named count used by every distribution view."""

    name: str
    value: int = Field(..., ge=0)
    description: Optional[str] = None
    color: Optional[str] = None


class SegmentSummary(CamelModel):
    """Size of one readiness segment."""

    segment: ReadinessSegment
    label: str
    count: int = Field(..., ge=0)
    share: float = Field(..., ge=0.0, le=1.0, description="count / total, 0 when total is 0")
    description: str
    color: str


class EvidenceQuote(CamelModel):
    """Verbatim respondent line tagged with a founder theme."""

    theme: FounderTheme
    quote: str
    source_label: str = Field(
        ...,
        description="Provenance label, e.g. 'Interview #3 • Pharmacy • I/10'",
    )
    interview_id: Optional[str] = None
    transcript_file_name: Optional[str] = None


class RecommendedExperiment(CamelModel):
    title: str
    success_metric: str
    why_now: str


class PilotCandidate(CamelModel):
    """Ready/promising interview surfaced on the main dashboard."""

    interview_id: str
    label: str
    reason: str


class FounderDashboardData(CamelModel):
    """Aggregate returned by the founder-insights pipeline.

    Built once per process from the full interview + transcript snapshot.
    """

    total_interviews: int = Field(..., ge=0)
    fx_inquiry_count: int = Field(..., ge=0)
    help_request_count: int = Field(..., ge=0)
    fraud_story_count: int = Field(..., ge=0)
    busy_time_distribution: List[BarDatum]
    payment_method_mentions: List[BarDatum]
    fx_referral_destinations: List[BarDatum]
    why_not_handle_fx_buckets: List[BarDatum]
    fraud_pattern_buckets: List[BarDatum]
    segments: List[SegmentSummary]
    top_opportunities: List[str]
    key_risks: List[str]
    recommended_experiments: List[RecommendedExperiment]
    pilot_candidates: List[PilotCandidate]
    evidence_quotes: List[EvidenceQuote]
    data_quality_notes: List[str]
