"""Interview directory and detail routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ..schemas.interview_schema import InterviewDetailResponse, InterviewDirectoryResponse
from ..services.founder_dashboard import get_transcript_matches
from ..services.interview_loader import (
    get_interview_by_id,
    get_interviews,
    search_interviews,
    to_summary,
)

router = APIRouter(
    prefix="/interviews",
    tags=["Interviews"],
)


@router.get(
    "",
    response_model=InterviewDirectoryResponse,
    summary="Search and filter the interview directory",
)
async def list_interviews(
    q: str = Query("", description="Case-insensitive text search"),
    fraud: bool = Query(False, description="Only interviews with a fraud story"),
    help: bool = Query(False, description="Only interviews where customers asked for help"),
    fx: bool = Query(False, description="Only interviews with an FX inquiry"),
) -> InterviewDirectoryResponse:
    interviews = get_interviews()
    results = search_interviews(interviews, q, only_fraud=fraud, only_help=help, only_fx=fx)
    return InterviewDirectoryResponse(
        total=len(interviews),
        result_count=len(results),
        fraud_count=sum(1 for i in interviews if i.fraud_story),
        help_count=sum(1 for i in interviews if i.customer_asked_for_help),
        fx_count=sum(1 for i in interviews if i.dollar_inquiry),
        interviews=[to_summary(i) for i in results],
    )


@router.get(
    "/{interview_id}",
    response_model=InterviewDetailResponse,
    summary="Full interview with its matched transcript file",
)
async def interview_detail(interview_id: str) -> InterviewDetailResponse:
    interview = get_interview_by_id(interview_id)
    if interview is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Interview {interview_id} not found",
        )

    transcript = get_transcript_matches().get(interview.id)
    return InterviewDetailResponse(
        interview=interview,
        transcript_file_name=transcript.file_name if transcript else None,
        transcript_text=transcript.text if transcript else None,
    )
