from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from scholar_tracker.utils.validators import normalize_documents, parse_deadline


class FundingType(str, Enum):
    full = "Full"
    partial = "Partial"
    self_funded = "Self-funded"
    external = "External"


class ScholarshipStatus(str, Enum):
    not_started = "Not Started"
    researching = "Researching"
    in_progress = "In Progress"
    applied = "Applied"
    interview = "Interview"
    accepted = "Accepted"
    rejected = "Rejected"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class ScholarshipBase(_CamelModel):
    scholarship_name: str = Field(..., min_length=1)
    university_name: str = Field(..., min_length=1)
    country: str
    funding_type: FundingType
    professor_email: Optional[str] = None
    required_documents: List[str] = Field(default_factory=list)
    documents_done: List[str] = Field(default_factory=list)
    deadline: Optional[date] = None
    status: ScholarshipStatus = Field(ScholarshipStatus.not_started, validate_default=True)
    apply_link: Optional[str] = None
    notes: Optional[str] = None
    portal_signup: bool = False
    apply_started: bool = False

    @field_validator("deadline", mode="before")
    @classmethod
    def coerce_deadline(cls, v):
        return parse_deadline(v)

    @field_validator("required_documents", "documents_done", mode="before")
    @classmethod
    def default_documents(cls, v):
        return normalize_documents(v)


class ScholarshipCreate(ScholarshipBase):
    pass


class ScholarshipUpdate(_CamelModel):
    """Partial update: only fields present in the payload are applied."""

    scholarship_name: Optional[str] = Field(None, min_length=1)
    university_name: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = None
    funding_type: Optional[FundingType] = None
    professor_email: Optional[str] = None
    required_documents: Optional[List[str]] = None
    documents_done: Optional[List[str]] = None
    deadline: Optional[date] = None
    status: Optional[ScholarshipStatus] = None
    apply_link: Optional[str] = None
    notes: Optional[str] = None
    portal_signup: Optional[bool] = None
    apply_started: Optional[bool] = None

    @field_validator(
        "scholarship_name",
        "university_name",
        "country",
        "funding_type",
        "status",
        "portal_signup",
        "apply_started",
    )
    @classmethod
    def reject_null(cls, v):
        # only runs for keys present in the payload
        if v is None:
            raise ValueError("Field may not be null")
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def coerce_deadline(cls, v):
        return parse_deadline(v)

    @field_validator("required_documents", "documents_done", mode="before")
    @classmethod
    def default_documents(cls, v):
        return normalize_documents(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ScholarshipRead(ScholarshipBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class StatusCount(_CamelModel):
    name: str
    value: int


class CountryCount(_CamelModel):
    name: str
    count: int


class UpcomingDeadline(_CamelModel):
    id: Optional[int] = None
    scholarship_name: str
    university_name: str
    country: str
    deadline: date
    days_left: int
    urgent: bool


class DashboardRead(_CamelModel):
    total: int
    accepted_count: int
    applied_count: int
    pending_count: int
    status_breakdown: List[StatusCount]
    country_breakdown: List[CountryCount]
    upcoming_deadlines: List[UpcomingDeadline]
