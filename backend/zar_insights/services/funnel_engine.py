"""Conversion funnel: five successively narrowing filters.

Each stage filters the PREVIOUS stage's population, so counts are
non-increasing by construction.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..constants import FUNNEL_DROP_OFF_REASONS, FUNNEL_STAGE_NAMES
from ..schemas.interview_schema import Interview
from ..schemas.validation_schema import FunnelStage
from .text_normalizer import round_half_up

# Independent of the pilot scorer's rail list.
FUNNEL_DIGITAL_KEYWORDS: tuple[str, ...] = (
    "easypaisa", "jazzcash", "bank", "sadapay", "nayapay", "raast",
)


def _is_digital_active(interview: Interview) -> bool:
    methods = [m.lower() for m in interview.payment_methods]
    return any(keyword in m for m in methods for keyword in FUNNEL_DIGITAL_KEYWORDS)


def _percentage(count: int, total: int) -> int:
    return round_half_up(count / total * 100) if total > 0 else 0


def _stage(name: str, population: Sequence[Interview], total: int) -> FunnelStage:
    reason: Optional[str] = FUNNEL_DROP_OFF_REASONS.get(name)
    return FunnelStage(
        name=name,
        count=len(population),
        percentage=_percentage(len(population), total),
        interview_ids=[i.id for i in population],
        drop_off_reason=reason,
    )


def compute_conversion_funnel(interviews: Sequence[Interview]) -> List[FunnelStage]:
    """All Interviews → Digital Active → FX Demand → Willing to Help → Pilot Ready."""
    total = len(interviews)

    all_interviews = list(interviews)
    digital_active = [i for i in all_interviews if _is_digital_active(i)]
    fx_demand = [i for i in digital_active if i.dollar_inquiry]
    willing = [i for i in fx_demand if i.customer_asked_for_help]
    pilot_ready = [i for i in willing if not i.fraud_story]

    populations = (all_interviews, digital_active, fx_demand, willing, pilot_ready)
    return [
        _stage(name, population, total)
        for name, population in zip(FUNNEL_STAGE_NAMES, populations)
    ]
