import math
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Operation(str, Enum):
    QUICK_TRIAGE = "quick-triage"
    FULL_ANALYZE = "full-analyze"
    STATUS_EXPLAIN = "status-explain"
    GENERATE_EMAIL = "generate-email"
    USER_CHAT = "user-chat"
    PERSONAL_REPORT = "personal-report"
    ADMIN_INSIGHTS = "admin-insights"
    GENERATE_REMINDER = "generate-reminder"


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


Level = Literal["Low", "Medium", "High", "Critical"]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def normalize_level(value: Any) -> Any:
    """Accept 'critical', ' HIGH ' etc. for urgency/priority levels."""
    if isinstance(value, str):
        return value.strip().capitalize()
    return value


# --- Inbound ---

class ComplaintSnapshot(CamelModel):
    """Partial, caller-supplied view of a complaint. Nothing here is guaranteed."""
    description: Optional[str] = None
    category: Optional[str] = None
    urgency: Optional[str] = None
    status: Optional[str] = None
    ai_summary: Optional[str] = None
    created_at: Any = None


class RequestModel(CamelModel):
    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # An explicit null means "not supplied"; the field default applies
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class _SingleComplaintRequest(RequestModel):
    complaint: ComplaintSnapshot = Field(default_factory=ComplaintSnapshot)


class _ComplaintListRequest(RequestModel):
    complaints: List[ComplaintSnapshot] = []

    @field_validator("complaints", mode="before")
    @classmethod
    def _skip_null_entries(cls, v):
        if isinstance(v, list):
            return [c for c in v if c is not None]
        return v


class QuickTriageRequest(RequestModel):
    text: str = ""


class FullAnalyzeRequest(RequestModel):
    description: str = ""
    image_url: Optional[str] = None


class StatusExplainRequest(_SingleComplaintRequest):
    status: str = ""


class GenerateEmailRequest(_SingleComplaintRequest):
    type: str = "report"  # strict | friendly | report


class UserChatRequest(_ComplaintListRequest):
    user_id: Optional[str] = None
    query: str = ""


class PersonalReportRequest(_ComplaintListRequest):
    user_id: Optional[str] = None


class AdminInsightsRequest(_ComplaintListRequest):
    pass


class GenerateReminderRequest(_SingleComplaintRequest):
    pass


# --- Outbound ---

class QuickTriageResult(CamelModel):
    category: NonEmptyStr
    priority: Level
    suggested_image: str = ""
    is_valid: bool = False

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, v):
        return normalize_level(v)


class DetectedObject(CamelModel):
    label: NonEmptyStr
    confidence: float = Field(ge=0, le=100)


class FullAnalysisResult(CamelModel):
    category: NonEmptyStr
    urgency: Level
    priority_score: int
    priority_reason: List[NonEmptyStr]
    ai_summary: str
    suggested_assignment: NonEmptyStr
    status_explanation: NonEmptyStr
    detected_objects: List[DetectedObject] = []

    @field_validator("urgency", mode="before")
    @classmethod
    def _urgency(cls, v):
        return normalize_level(v)

    @field_validator("priority_score", mode="before")
    @classmethod
    def _score(cls, v):
        # Integer in [0, 100]; "87" and 87.4 are accepted, booleans are not
        if isinstance(v, bool):
            raise ValueError("priorityScore must be a number")
        if isinstance(v, str):
            v = float(v.strip())
        if isinstance(v, (int, float)):
            if math.isnan(v) or math.isinf(v):
                raise ValueError("priorityScore must be finite")
            return max(0, min(100, int(round(v))))
        return v


class StatusExplanationResult(CamelModel):
    explanation: str


class EmailResult(CamelModel):
    email: str


class ChatResult(CamelModel):
    response: str


class ReportStats(CamelModel):
    total: int = 0
    resolved: int = 0
    pending: int = 0
    in_progress: int = 0


class PersonalReportResult(CamelModel):
    summary: NonEmptyStr
    stats: ReportStats
    insights: List[str] = []


class AdminInsightsResult(CamelModel):
    most_common_issue: NonEmptyStr
    hotspot_area: NonEmptyStr
    trends: NonEmptyStr


class ReminderResult(CamelModel):
    reminder: str


# --- Upstream ---

class GenerationConfig(CamelModel):
    temperature: float = 0.7
    max_output_tokens: int = 1024
