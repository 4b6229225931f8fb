# Schemas package
from .interview_schema import (
    CamelModel,
    Interview,
    InterviewDetailResponse,
    InterviewDirectoryResponse,
    InterviewSummary,
    TranscriptDocument,
)
from .founder_schema import (
    BarDatum,
    EvidenceQuote,
    FounderDashboardData,
    PilotCandidate,
    RecommendedExperiment,
    SegmentSummary,
)
from .validation_schema import (
    CandidateFactors,
    EnhancedPilotCandidate,
    FounderOverview,
    FunnelStage,
    ValidationDimension,
    ValidationScorecard,
    WillingnessFactor,
)
from .nexus_schema import NexusPayload, NexusRequest, NexusResponse, SyncResult, SyncState

__all__ = [
    "CamelModel",
    "Interview",
    "InterviewDetailResponse",
    "InterviewDirectoryResponse",
    "InterviewSummary",
    "TranscriptDocument",
    "BarDatum",
    "EvidenceQuote",
    "FounderDashboardData",
    "PilotCandidate",
    "RecommendedExperiment",
    "SegmentSummary",
    "CandidateFactors",
    "EnhancedPilotCandidate",
    "FounderOverview",
    "FunnelStage",
    "ValidationDimension",
    "ValidationScorecard",
    "WillingnessFactor",
    "NexusPayload",
    "NexusRequest",
    "NexusResponse",
    "SyncResult",
    "SyncState",
]
