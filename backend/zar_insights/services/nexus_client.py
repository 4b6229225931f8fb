"""
Nexus Webhook Client

Posts interview content to the Nexus knowledge-distillation webhook over a
shared httpx.AsyncClient with connection pooling.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .. import config
from ..schemas.interview_schema import Interview
from ..schemas.nexus_schema import NexusPayload, NexusResponse

logger = logging.getLogger(__name__)


# Shared client instance (lazily initialized)
_client: Optional[httpx.AsyncClient] = None


async def get_client() -> httpx.AsyncClient:
    """Get the shared async HTTP client."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.NEXUS_TIMEOUT, connect=5.0),
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            follow_redirects=True,
        )
    return _client


async def close_client():
    """Close the shared client (call on app shutdown)."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def send_to_nexus(
    payload: NexusPayload,
    client: Optional[httpx.AsyncClient] = None,
) -> NexusResponse:
    """POST one payload to the webhook.

    Never raises for transport or HTTP failures; those come back as
    ``success=False`` with an error string. A numeric ``session_id`` in the
    reply is kept as text and any other non-string value is dropped.
    """
    if not config.NEXUS_API_KEY:
        logger.warning("[NEXUS] NEXUS_API_KEY not configured - skipping Nexus integration")
        return NexusResponse(success=False, error="NEXUS_API_KEY not configured")

    body = {
        "content": payload.content,
        "source": payload.source or config.NEXUS_SOURCE,
        "session_id": payload.session_id,
        "project": payload.project or config.NEXUS_PROJECT,
        "metadata": payload.metadata,
    }
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.NEXUS_API_KEY}",
    }

    http = client or await get_client()
    try:
        response = await http.post(config.NEXUS_WEBHOOK_URL, json=body, headers=headers)
    except httpx.HTTPError as exc:
        logger.error("[NEXUS] Failed to send to Nexus: %s", exc)
        return NexusResponse(success=False, error=str(exc) or exc.__class__.__name__)

    if not response.is_success:
        logger.error("[NEXUS] Webhook error %d: %s", response.status_code, response.text)
        return NexusResponse(
            success=False,
            error=f"HTTP {response.status_code}: {response.text}",
        )

    try:
        data = response.json()
    except ValueError:
        data = {}
    session_id = data.get("session_id") if isinstance(data, dict) else None
    if isinstance(session_id, (int, float)) and not isinstance(session_id, bool):
        session_id = str(session_id)
    elif not isinstance(session_id, str):
        session_id = None
    return NexusResponse(success=True, session_id=session_id)


def format_interview_for_nexus(interview: Interview) -> str:
    """Markdown document for one interview, structured for LLM extraction."""
    sections = [
        f"# ZAR Retail Payment Survey Interview #{interview.id}",
        "",
        f"**Interviewer:** {interview.interviewer}",
        f"**Date:** {interview.date_of_interview}",
        f"**Shop Type:** {interview.shop_type}",
        f"**Location:** {interview.location}",
        f"**Payment Methods:** {', '.join(interview.payment_methods) or 'Cash only'}",
        "",
    ]

    if interview.fraud_story and interview.fraud_details:
        sections += ["## Fraud Incident Reported", interview.fraud_details, ""]

    if interview.dollar_inquiry:
        sections += [
            "## Dollar/Foreign Currency Interest",
            "Customer has inquired about dollar exchange.",
            "",
        ]

    if interview.exact_phrases:
        sections += ["## Key Phrases About Money, Trust, or Fraud", interview.exact_phrases, ""]

    if interview.surprising_observations:
        sections += ["## Notable Observations", interview.surprising_observations, ""]

    sections += ["## Full Transcript", interview.transcript]
    return "\n".join(sections)


def interview_metadata(interview: Interview) -> Dict[str, Any]:
    return {
        "interview_id": interview.id,
        "interviewer": interview.interviewer,
        "shop_type": interview.shop_type,
        "location": interview.location,
        "date": interview.date_of_interview,
    }


def build_interview_payload(interview: Interview) -> NexusPayload:
    """Webhook payload for one interview; session id is ``interview-<id>``."""
    return NexusPayload(
        content=format_interview_for_nexus(interview),
        session_id=f"interview-{interview.id}",
        metadata=interview_metadata(interview),
    )
