from .founder_dashboard import (
    build_founder_dashboard_data,
    build_founder_overview,
    get_founder_dashboard_data,
    get_founder_overview,
    get_validation_scorecard,
)
from .funnel_engine import compute_conversion_funnel
from .interview_loader import get_interviews, parse_interviews, search_interviews
from .nexus_client import format_interview_for_nexus, send_to_nexus
from .nexus_sync import sync_new_interviews_to_nexus
from .pilot_scorer import compute_enhanced_pilot_candidates
from .scoring_engine import compute_validation_scorecard
from .transcript_loader import get_transcript_documents, load_transcript_documents
from .transcript_matcher import match_transcripts_to_interviews
from .willingness_factors import extract_willingness_factors

__all__ = [
    "build_founder_dashboard_data",
    "build_founder_overview",
    "get_founder_dashboard_data",
    "get_founder_overview",
    "get_validation_scorecard",
    "compute_conversion_funnel",
    "get_interviews",
    "parse_interviews",
    "search_interviews",
    "format_interview_for_nexus",
    "send_to_nexus",
    "sync_new_interviews_to_nexus",
    "compute_enhanced_pilot_candidates",
    "compute_validation_scorecard",
    "get_transcript_documents",
    "load_transcript_documents",
    "match_transcripts_to_interviews",
    "extract_willingness_factors",
]
