from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .interview_schema import CamelModel


class NexusPayload(BaseModel):
    """Body posted to the Nexus knowledge-distillation webhook."""

    content: str = Field(..., min_length=1)
    source: Optional[str] = None
    session_id: Optional[str] = None
    project: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class NexusResponse(BaseModel):
    success: bool
    session_id: Optional[str] = None
    error: Optional[str] = None


class NexusRequest(BaseModel):
    """Body accepted by ``POST /nexus``.

    Exactly one mode is used, checked in order: raw ``content``, a single
    ``interview_id``, or ``all`` interviews.
    """

    content: Optional[str] = None
    source: Optional[str] = None
    session_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    interview_id: Optional[str] = None
    all: bool = False


class NexusInterviewResult(BaseModel):
    interview_id: str
    success: bool
    error: Optional[str] = None


class NexusBulkResponse(BaseModel):
    success: bool
    total: int = Field(..., ge=0)
    successful: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    results: List[NexusInterviewResult]


class SyncState(CamelModel):
    """Contents of the sync-state marker file, keyed in camelCase on disk."""

    model_config = ConfigDict(frozen=False)

    last_synced_ids: List[str] = Field(default_factory=list)
    last_sync_time: str = ""


class SyncResult(BaseModel):
    synced: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
