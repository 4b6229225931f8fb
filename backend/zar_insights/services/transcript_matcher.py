"""Transcript ↔ interview matching.

Transcript files on disk are not keyed to survey rows, so each file is
paired with the interview whose embedded transcript shares the most
vocabulary. Greedy approximation of a maximum-weight bipartite matching:
pairs are taken in descending Jaccard order, skipping anything already
assigned on either side and anything under ``MATCH_SCORE_FLOOR``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from ..constants import MATCH_SCORE_FLOOR
from ..schemas.interview_schema import Interview, TranscriptDocument
from .text_normalizer import jaccard_similarity, tokenize_for_match

logger = logging.getLogger(__name__)


def score_pairs(
    transcripts: Sequence[TranscriptDocument],
    interviews: Sequence[Interview],
) -> List[Tuple[str, TranscriptDocument, float]]:
    """Score every (interview, transcript) pair, best first.

    The sort is stable, so exactly-equal scores keep transcript-major
    iteration order.
    """
    interview_tokens = {i.id: tokenize_for_match(i.transcript) for i in interviews}
    transcript_tokens = [tokenize_for_match(t.text) for t in transcripts]

    pairs: List[Tuple[str, TranscriptDocument, float]] = []
    for idx, transcript in enumerate(transcripts):
        for interview in interviews:
            score = jaccard_similarity(interview_tokens[interview.id], transcript_tokens[idx])
            pairs.append((interview.id, transcript, score))

    pairs.sort(key=lambda pair: pair[2], reverse=True)
    return pairs


def match_transcripts_to_interviews(
    transcripts: Sequence[TranscriptDocument],
    interviews: Sequence[Interview],
) -> Dict[str, TranscriptDocument]:
    """Return an injective ``interview_id -> TranscriptDocument`` mapping."""
    assigned_interviews: set[str] = set()
    assigned_transcripts: set[str] = set()
    result: Dict[str, TranscriptDocument] = {}

    for interview_id, transcript, score in score_pairs(transcripts, interviews):
        if interview_id in assigned_interviews:
            continue
        if transcript.id in assigned_transcripts:
            continue
        if score < MATCH_SCORE_FLOOR:
            continue
        assigned_interviews.add(interview_id)
        assigned_transcripts.add(transcript.id)
        result[interview_id] = transcript

    logger.info(
        "[MATCHER] Matched %d/%d transcripts to %d interviews",
        len(result), len(transcripts), len(interviews),
    )
    return result
