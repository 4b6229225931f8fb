"""Founder Insights Routes.

Thin read-only views over the memoized dashboard aggregate. All business
logic lives in the service functions.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter

from ..schemas.founder_schema import FounderDashboardData
from ..schemas.validation_schema import (
    EnhancedPilotCandidate,
    FounderOverview,
    FunnelStage,
    ValidationScorecard,
    WillingnessFactor,
)
from ..services.founder_dashboard import (
    get_founder_dashboard_data,
    get_founder_overview,
    get_validation_scorecard,
)
from ..services.funnel_engine import compute_conversion_funnel
from ..services.interview_loader import get_interviews
from ..services.pilot_scorer import compute_enhanced_pilot_candidates
from ..services.willingness_factors import extract_willingness_factors

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/founders",
    tags=["Founders"],
)


@router.get(
    "/dashboard",
    response_model=FounderDashboardData,
    summary="Founder dashboard aggregate",
)
async def founder_dashboard() -> FounderDashboardData:
    return get_founder_dashboard_data()


@router.get(
    "/overview",
    response_model=FounderOverview,
    summary="Dashboard plus validation scorecard, funnel, willingness and pilot ranking",
)
async def founder_overview() -> FounderOverview:
    return get_founder_overview()


@router.get(
    "/scorecard",
    response_model=ValidationScorecard,
    summary="Lean-startup validation scorecard",
)
async def validation_scorecard() -> ValidationScorecard:
    return get_validation_scorecard()


@router.get(
    "/funnel",
    response_model=List[FunnelStage],
    summary="Five-stage FX conversion funnel",
)
async def conversion_funnel() -> List[FunnelStage]:
    return compute_conversion_funnel(get_interviews())


@router.get(
    "/willingness",
    response_model=List[WillingnessFactor],
    summary="Trust factors that make merchants willing to adopt",
)
async def willingness_factors() -> List[WillingnessFactor]:
    return extract_willingness_factors(get_interviews())


@router.get(
    "/pilot-candidates",
    response_model=List[EnhancedPilotCandidate],
    summary="Pilot candidates ranked by readiness score",
)
async def pilot_candidates() -> List[EnhancedPilotCandidate]:
    candidates = compute_enhanced_pilot_candidates(get_interviews())
    logger.info("[FOUNDERS] %d pilot candidates above threshold", len(candidates))
    return candidates
