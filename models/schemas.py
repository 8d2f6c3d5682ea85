"""
Pydantic schemas for request/response validation.
Reusable across routes; keeps API contracts explicit.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StudentPayload(BaseModel):
    """
    Client-supplied student fields for create and update.
    id and timestamps are owned by the store, so unknown keys are ignored.
    """

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    student_id: str = Field(..., min_length=1, max_length=64)
    major: str = Field(..., min_length=1, max_length=255)
    year: int = Field(..., ge=1, le=10)

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        local, sep, domain = v.partition("@")
        if not sep or not local or not domain or "@" in domain or " " in v:
            raise ValueError("email must look like name@domain")
        return v


class Student(BaseModel):
    """A persisted student record as returned to callers."""

    id: int
    first_name: str
    last_name: str
    email: str
    student_id: str
    major: str
    year: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Standard error payload for API responses."""

    error: str


class HealthResponse(BaseModel):
    """Health payload: process is up, plus store reachability."""

    status: str
    database: str
    service: str
