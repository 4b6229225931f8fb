"""Transcript loader: reads ``*.txt`` transcripts from the transcripts directory."""

from __future__ import annotations

import functools
import logging
import os
import re
from typing import List

from .. import config
from ..schemas.interview_schema import TranscriptDocument

logger = logging.getLogger(__name__)

_TXT_SUFFIX_RE = re.compile(r"\.txt$", re.IGNORECASE)
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def stable_id_from_file_name(file_name: str) -> str:
    """``"Interview 03 - Pharmacy.txt"`` → ``"interview-03-pharmacy"``."""
    base = _TXT_SUFFIX_RE.sub("", file_name)
    return _NON_SLUG_RE.sub("-", base.lower()).strip("-")


def _safe_read_utf8(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("[LOADER] Could not read transcript %s: %s", path, exc)
        return ""


def load_transcript_documents(directory: str) -> List[TranscriptDocument]:
    """Non-empty transcripts in *directory*, sorted by file name."""
    if not os.path.isdir(directory):
        logger.warning("[LOADER] Transcripts directory not found: %s", directory)
        return []

    file_names = sorted(
        (
            name
            for name in os.listdir(directory)
            if name.lower().endswith(".txt") and os.path.isfile(os.path.join(directory, name))
        ),
        key=lambda name: (name.lower(), name),
    )

    documents: List[TranscriptDocument] = []
    for file_name in file_names:
        text = _safe_read_utf8(os.path.join(directory, file_name)).strip()
        if not text:
            continue
        documents.append(TranscriptDocument(
            id=stable_id_from_file_name(file_name),
            file_name=file_name,
            text=text,
        ))

    logger.info("[LOADER] Loaded %d transcripts from %s", len(documents), directory)
    return documents


@functools.lru_cache(maxsize=1)
def get_transcript_documents() -> tuple[TranscriptDocument, ...]:
    """Transcripts from ``TRANSCRIPTS_DIR``, loaded once per process."""
    return tuple(load_transcript_documents(config.TRANSCRIPTS_DIR))
