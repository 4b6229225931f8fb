from typing import List, Literal, Optional

from pydantic import Field

from .founder_schema import FounderDashboardData
from .interview_schema import CamelModel

ValidationVerdict = Literal["persevere", "investigate", "pivot", "kill"]
ValidationSignal = Literal["strong", "moderate", "weak", "absent"]
ConfidenceLevel = Literal["high", "medium", "low"]
DimensionId = Literal["problem", "willingness", "friction", "trust", "pilots"]
Actionability = Literal["high", "medium", "low"]
TrustConcernLevel = Literal["low", "medium", "high"]


class ValidationDimension(CamelModel):
    """One of the five lean-startup validation dimensions."""

    id: DimensionId
    name: str
    score: int = Field(..., ge=0, le=100)
    signal: ValidationSignal
    summary: str
    evidence_ids: List[str] = Field(default_factory=list)


class ValidationScorecard(CamelModel):
    """Persevere / investigate / pivot / kill decision over five dimensions."""

    overall_verdict: ValidationVerdict
    verdict_rationale: str
    confidence_level: ConfidenceLevel
    dimensions: List[ValidationDimension]
    last_updated: str = Field(..., description="ISO-8601 UTC timestamp")


class FunnelStage(CamelModel):
    name: str
    count: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)
    interview_ids: List[str]
    drop_off_reason: Optional[str] = None


class WillingnessFactor(CamelModel):
    """A trust driver mentioned by merchants, with a suggested founder action."""

    factor: str
    mention_count: int = Field(..., ge=0)
    interview_ids: List[str]
    actionability: Actionability
    suggested_action: str


class CandidateFactors(CamelModel):
    has_fx_demand: bool
    helps_customers: bool
    digital_rail_count: int = Field(..., ge=0)
    trust_concern_level: TrustConcernLevel
    currently_refers: bool


class EnhancedPilotCandidate(CamelModel):
    """Interview scored for pilot readiness with outreach guidance."""

    interview_id: str
    shop_type: str
    location: str
    owner_age: int
    daily_customers: str
    readiness_score: int = Field(..., ge=0, le=100)
    factors: CandidateFactors
    approach_script: str
    risk_mitigation: str


class FounderOverview(CamelModel):
    """Dashboard aggregate plus the validation framework views."""

    dashboard: FounderDashboardData
    validation_scorecard: ValidationScorecard
    conversion_funnel: List[FunnelStage]
    willingness_factors: List[WillingnessFactor]
    enhanced_pilot_candidates: List[EnhancedPilotCandidate]
