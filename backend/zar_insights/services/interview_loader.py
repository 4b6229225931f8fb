"""Survey loader: parses the markdown survey export into ``Interview`` records.

The export is a single markdown table: a header row, a separator row and
one body row per interview. Column names are fixed (``SURVEY_COLUMNS``).
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Dict, List, Optional, Sequence

from .. import config
from ..constants import LIST_SPLIT_RE, SURVEY_COLUMNS, YES_VALUES
from ..schemas.interview_schema import Interview, InterviewSummary

logger = logging.getLogger(__name__)

TableRow = Dict[str, str]

_LINE_BREAK_RE = re.compile(r"\r?\n")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


# ===================================================================== #
#  Markdown table parsing                                                 #
# ===================================================================== #

def split_markdown_row(line: str) -> List[str]:
    """Cells of one ``| a | b |`` row; empty cells are kept as ``""``."""
    trimmed = line.strip()
    if not trimmed.startswith("|"):
        return []
    parts = trimmed.split("|")
    return [cell.strip() for cell in parts[1:-1]]


def parse_markdown_table(md: str) -> tuple[List[str], List[TableRow]]:
    """Return ``(headers, rows)``; fewer than three lines means no table."""
    lines = [line.rstrip() for line in _LINE_BREAK_RE.split(md)]
    lines = [line for line in lines if line.strip()]

    if len(lines) < 3:
        return [], []

    headers = split_markdown_row(lines[0])
    rows: List[TableRow] = []
    for line in lines[2:]:
        cells = split_markdown_row(line)
        if not cells:
            continue
        rows.append({
            header: cells[idx] if idx < len(cells) else ""
            for idx, header in enumerate(headers)
        })
    return headers, rows


# ===================================================================== #
#  Cell parsers                                                           #
# ===================================================================== #

def parse_yes_no(value: str) -> bool:
    return (value or "").strip().lower() in YES_VALUES


def to_none_if_empty(value: str) -> Optional[str]:
    trimmed = (value or "").strip()
    return trimmed or None


def parse_list(value: str) -> List[str]:
    """Split a free-text list on commas, semicolons and the words or/and."""
    trimmed = (value or "").strip()
    if not trimmed:
        return []
    return [item.strip() for item in LIST_SPLIT_RE.split(trimmed) if item.strip()]


def parse_owner_age(value: str) -> int:
    """Leading integer of the cell (``"45 years"`` → 45); 0 when absent."""
    match = _LEADING_INT_RE.match((value or "").strip())
    if not match:
        return 0
    return max(0, int(match.group(0)))


def to_public_file_path(prefix: str, value: str) -> str:
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    if trimmed.startswith("/"):
        return trimmed
    return f"{prefix}{trimmed}"


def row_to_interview(row: TableRow, index: int) -> Interview:
    """Build the ``Interview`` for body row *index* (0-based)."""

    def cell(key: str) -> str:
        return (row.get(SURVEY_COLUMNS[key]) or "").strip()

    return Interview(
        id=str(index + 1),
        timestamp=cell("timestamp"),
        interviewer=cell("interviewer"),
        date_of_interview=cell("date_of_interview"),
        time_of_interview=cell("time_of_interview"),
        shop_type=cell("shop_type"),
        location=cell("location"),
        owner_age=parse_owner_age(cell("owner_age")),
        customers_per_day=cell("customers_per_day"),
        busiest_time=cell("busiest_time"),
        payment_methods=parse_list(cell("payment_methods")),
        mobile_payment_timeline=cell("mobile_payment_timeline"),
        concerns_before_starting=cell("concerns_before_starting"),
        current_problems=cell("current_problems"),
        customer_asked_for_help=parse_yes_no(cell("customer_asked_for_help")),
        help_request_details=to_none_if_empty(cell("help_request_details")),
        dollar_inquiry=parse_yes_no(cell("dollar_inquiry")),
        dollar_response=to_none_if_empty(cell("dollar_response")),
        currency_exchange_referral=parse_list(cell("currency_exchange_referral")),
        why_refer_elsewhere=cell("why_refer_elsewhere"),
        fraud_story=parse_yes_no(cell("fraud_story")),
        fraud_details=to_none_if_empty(cell("fraud_details")),
        money_lost=to_none_if_empty(cell("money_lost")),
        avoidance_behaviors=to_none_if_empty(cell("avoidance_behaviors")),
        last_new_service=cell("last_new_service"),
        service_influencer=cell("service_influencer"),
        trust_factors=cell("trust_factors"),
        exact_phrases=to_none_if_empty(cell("exact_phrases")),
        surprising_observations=to_none_if_empty(cell("surprising_observations")),
        audio_file=to_public_file_path("/audio/", cell("audio_file")),
        photo_file=to_public_file_path("/photos/", cell("photo_file")),
        transcript=cell("transcript"),
    )


def parse_interviews(md: str) -> List[Interview]:
    _, rows = parse_markdown_table(md)
    return [row_to_interview(row, index) for index, row in enumerate(rows)]


# ===================================================================== #
#  Process-level accessors                                                #
# ===================================================================== #

@functools.lru_cache(maxsize=1)
def get_interviews() -> tuple[Interview, ...]:
    """Load and parse the survey table once per process.

    Raises ``FileNotFoundError`` when the export is missing.
    """
    path = config.INTERVIEWS_MD_PATH
    with open(path, encoding="utf-8") as fh:
        md = fh.read()
    interviews = tuple(parse_interviews(md))
    logger.info("[LOADER] Parsed %d interviews from %s", len(interviews), path)
    return interviews


def get_interview_by_id(interview_id: str) -> Optional[Interview]:
    return next((i for i in get_interviews() if i.id == interview_id), None)


# ===================================================================== #
#  Interview directory                                                    #
# ===================================================================== #

def to_summary(interview: Interview) -> InterviewSummary:
    return InterviewSummary(
        id=interview.id,
        interviewer=interview.interviewer,
        date_of_interview=interview.date_of_interview,
        time_of_interview=interview.time_of_interview,
        shop_type=interview.shop_type,
        location=interview.location,
        owner_age=interview.owner_age,
        customers_per_day=interview.customers_per_day,
        busiest_time=interview.busiest_time,
        payment_methods=list(interview.payment_methods),
        fraud_story=interview.fraud_story,
        customer_asked_for_help=interview.customer_asked_for_help,
        dollar_inquiry=interview.dollar_inquiry,
    )


def search_interviews(
    interviews: Sequence[Interview],
    query: str = "",
    only_fraud: bool = False,
    only_help: bool = False,
    only_fx: bool = False,
) -> List[Interview]:
    """Directory filter: flag toggles, then case-insensitive substring search."""
    q = (query or "").strip().lower()
    results: List[Interview] = []

    for i in interviews:
        if only_fraud and not i.fraud_story:
            continue
        if only_help and not i.customer_asked_for_help:
            continue
        if only_fx and not i.dollar_inquiry:
            continue
        if q:
            haystack = " ".join(
                v for v in (
                    i.id,
                    i.interviewer,
                    i.date_of_interview,
                    i.time_of_interview,
                    i.shop_type,
                    i.location,
                    i.customers_per_day,
                    i.busiest_time,
                    *i.payment_methods,
                )
                if v
            )
            if q not in haystack.strip().lower():
                continue
        results.append(i)

    return results
