"""Nexus Webhook Routes.

``POST /nexus`` forwards raw content, one interview or every interview to
the Nexus knowledge-distillation webhook. ``GET /nexus`` reports whether
the integration is configured.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

from .. import config
from ..schemas.nexus_schema import (
    NexusBulkResponse,
    NexusInterviewResult,
    NexusPayload,
    NexusRequest,
)
from ..services.interview_loader import get_interview_by_id, get_interviews
from ..services.nexus_client import build_interview_payload, send_to_nexus

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/nexus",
    tags=["Nexus"],
)


@router.get("", summary="Nexus configuration status")
async def nexus_status() -> Dict[str, Any]:
    return {
        "configured": config.nexus_configured(),
        "webhook_url": config.NEXUS_WEBHOOK_URL,
        "usage": {
            "single": "POST { interview_id: '1' }",
            "bulk": "POST { all: true }",
            "raw": "POST { content: '...' }",
        },
    }


@router.post("", summary="Send interview data to Nexus")
async def send_nexus(body: NexusRequest) -> Dict[str, Any]:
    # Option 1: raw content
    if body.content:
        result = await send_to_nexus(NexusPayload(
            content=body.content,
            source=body.source,
            session_id=body.session_id,
            metadata=body.metadata,
        ))
        return result.model_dump()

    # Option 2: a single interview
    if body.interview_id:
        interview = get_interview_by_id(body.interview_id)
        if interview is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Interview not found",
            )
        if not interview.transcript:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Interview has no transcript",
            )
        result = await send_to_nexus(build_interview_payload(interview))
        return {**result.model_dump(), "interview_id": interview.id}

    # Option 3: bulk
    if body.all:
        results: List[NexusInterviewResult] = []
        for interview in get_interviews():
            if not interview.transcript:
                results.append(NexusInterviewResult(
                    interview_id=interview.id, success=False, error="No transcript",
                ))
                continue

            result = await send_to_nexus(build_interview_payload(interview))
            results.append(NexusInterviewResult(
                interview_id=interview.id, success=result.success, error=result.error,
            ))
            if config.NEXUS_BULK_DELAY > 0:
                await asyncio.sleep(config.NEXUS_BULK_DELAY)

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        logger.info("[NEXUS] Bulk send: %d ok, %d failed", successful, failed)
        return NexusBulkResponse(
            success=failed == 0,
            total=len(results),
            successful=successful,
            failed=failed,
            results=results,
        ).model_dump()

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Invalid request. Provide interview_id, all: true, or content.",
    )
