"""Incremental Nexus sync: send only interviews not yet recorded in the state file."""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError

from .. import config
from ..schemas.interview_schema import Interview
from ..schemas.nexus_schema import SyncResult, SyncState
from .interview_loader import get_interviews
from .nexus_client import build_interview_payload, send_to_nexus

logger = logging.getLogger(__name__)


def load_sync_state(path: Optional[str] = None) -> SyncState:
    """Read the marker file; missing or unreadable state means nothing synced yet."""
    path = path or config.NEXUS_SYNC_STATE_PATH
    try:
        with open(path, encoding="utf-8") as fh:
            return SyncState.model_validate(json.load(fh))
    except FileNotFoundError:
        return SyncState()
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("[SYNC] Ignoring unreadable sync state %s: %s", path, exc)
        return SyncState()


def save_sync_state(state: SyncState, path: Optional[str] = None) -> None:
    path = path or config.NEXUS_SYNC_STATE_PATH
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(state.model_dump(by_alias=True), fh, indent=2)


async def sync_new_interviews_to_nexus(
    interviews: Optional[Sequence[Interview]] = None,
    client: Optional[httpx.AsyncClient] = None,
    state_path: Optional[str] = None,
    delay: Optional[float] = None,
) -> SyncResult:
    """Send every interview that has a transcript and is not yet in the state.

    Successful ids are appended to the state, which is rewritten with the
    current time after the pass even when nothing new was sent.
    """
    state = load_sync_state(state_path)
    if interviews is None:
        interviews = get_interviews()
    if delay is None:
        delay = config.NEXUS_REQUEST_DELAY

    result = SyncResult()
    for interview in interviews:
        if interview.id in state.last_synced_ids or not interview.transcript:
            result.skipped.append(interview.id)
            continue

        response = await send_to_nexus(build_interview_payload(interview), client=client)
        if response.success:
            result.synced.append(interview.id)
            state.last_synced_ids.append(interview.id)
        else:
            result.failed.append(interview.id)
            logger.error("[SYNC] Failed to sync interview %s: %s", interview.id, response.error)

        if delay > 0:
            await asyncio.sleep(delay)

    state.last_sync_time = datetime.now(timezone.utc).isoformat()
    save_sync_state(state, state_path)

    logger.info(
        "[SYNC] Nexus sync complete: %d synced, %d skipped, %d failed",
        len(result.synced), len(result.skipped), len(result.failed),
    )
    return result
