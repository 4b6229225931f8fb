from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every dashboard payload.

    Python attributes are snake_case; JSON keys are camelCase so the
    payloads match the dashboard's data model. Instances are immutable.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Interview(CamelModel):
    """One survey respondent parsed from the markdown survey export.

    Read-only input to the founder-insights pipeline. ``id`` is the
    1-based row position in the export and is used as the join key
    everywhere.
    """

    id: str = Field(..., description="Stable 1-based sequential identifier")
    timestamp: str = ""
    interviewer: str = ""
    date_of_interview: str = ""
    time_of_interview: str = ""
    shop_type: str = ""
    location: str = ""
    owner_age: int = Field(default=0, ge=0)
    customers_per_day: str = ""
    busiest_time: str = ""
    payment_methods: List[str] = Field(default_factory=list)
    mobile_payment_timeline: str = ""
    concerns_before_starting: str = ""
    current_problems: str = ""
    customer_asked_for_help: bool = False
    help_request_details: Optional[str] = None
    dollar_inquiry: bool = False
    dollar_response: Optional[str] = None
    currency_exchange_referral: List[str] = Field(default_factory=list)
    why_refer_elsewhere: str = ""
    fraud_story: bool = False
    fraud_details: Optional[str] = None
    money_lost: Optional[str] = None
    avoidance_behaviors: Optional[str] = None
    last_new_service: str = ""
    service_influencer: str = ""
    trust_factors: str = ""
    exact_phrases: Optional[str] = None
    surprising_observations: Optional[str] = None
    audio_file: str = ""
    photo_file: str = ""
    transcript: str = Field(
        default="",
        description="English transcript pasted into the survey sheet (may be empty)",
    )


class TranscriptDocument(CamelModel):
    """A transcript text file loaded independently of the survey table."""

    id: str = Field(..., description="Slug derived from the file name")
    file_name: str
    text: str


class InterviewSummary(CamelModel):
    """Directory row for the searchable interview listing."""

    id: str
    interviewer: str
    date_of_interview: str
    time_of_interview: str
    shop_type: str
    location: str
    owner_age: int
    customers_per_day: str
    busiest_time: str
    payment_methods: List[str]
    fraud_story: bool
    customer_asked_for_help: bool
    dollar_inquiry: bool


class InterviewDirectoryResponse(CamelModel):
    """Filtered directory listing plus the unfiltered flag counts."""

    total: int = Field(..., ge=0, description="Interviews before filtering")
    result_count: int = Field(..., ge=0)
    fraud_count: int = Field(..., ge=0)
    help_count: int = Field(..., ge=0)
    fx_count: int = Field(..., ge=0)
    interviews: List[InterviewSummary]


class InterviewDetailResponse(CamelModel):
    """A single interview plus the transcript file matched to it, if any."""

    interview: Interview
    transcript_file_name: Optional[str] = None
    transcript_text: Optional[str] = None
