"""Data models for API endpoints.

This module defines Pydantic models for persisted submissions, request bodies,
and the response envelope shared by every endpoint.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubmissionStatus(str, Enum):
    """Triage state of a contact submission."""

    NEW = "new"
    READ = "read"
    PROCESSED = "processed"

    @classmethod
    def values(cls) -> list[str]:
        """Accepted status strings, in declaration order."""
        return [member.value for member in cls]


class SubmissionDraft(BaseModel):
    """Contact form payload as supplied by the browser.

    Every field is optional here so that presence and format checks happen in
    the submission service, which owns the error messages.

    Attributes:
        name: Name of the person making the enquiry
        email: Reply address
        phone: Optional phone number
        service: Service the enquiry is about
        message: Free-text message
    """

    name: str | None = Field(default=None, examples=["Jo Bloggs"])
    email: str | None = Field(default=None, examples=["jo@example.com"])
    phone: str | None = Field(default=None, examples=["555-0100"])
    service: str | None = Field(default=None, examples=["Panel Upgrades"])
    message: str | None = Field(
        default=None,
        examples=["Our breaker keeps tripping when the dryer runs."],
    )


class Submission(BaseModel):
    """Persisted contact submission.

    Attributes:
        id: Store-assigned identifier
        name: Submitter's name
        email: Submitter's email
        phone: Submitter's phone, None when not supplied
        service: Requested service
        message: Message content
        created_at: Store-assigned creation time
        status: Triage state
    """

    id: int = Field(..., description="Store-assigned identifier")
    name: str = Field(..., description="Submitter's name")
    email: str = Field(..., description="Submitter's email")
    phone: str | None = Field(default=None, description="Submitter's phone")
    service: str = Field(..., description="Requested service")
    message: str = Field(..., description="Message content")
    created_at: datetime = Field(..., description="Creation time")
    status: SubmissionStatus = Field(
        default=SubmissionStatus.NEW,
        description="Triage state",
    )


class DashboardStats(BaseModel):
    """Aggregate counters shown on the admin dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., description="Count of all submissions")
    this_week: int = Field(
        ...,
        alias="thisWeek",
        description="Submissions created in the trailing seven days",
    )
    top_service: str = Field(
        ...,
        alias="topService",
        description='Most requested service, or "None" when there are no submissions',
    )


class LoginRequest(BaseModel):
    """Admin login request body."""

    email: str | None = Field(default=None, examples=["admin@brightwire.local"])
    password: str | None = Field(default=None)


class AdminIdentity(BaseModel):
    """Identity returned after a successful credential check."""

    email: str


class StatusUpdateRequest(BaseModel):
    """Body of a status update. Validated against SubmissionStatus by the service."""

    status: str | None = Field(default=None, examples=["read"])


class ApiResponse(BaseModel):
    """Uniform response envelope.

    Attributes:
        success: Whether the operation succeeded
        data: Operation result, when there is one
        error: Error description on failure
        message: Human-readable outcome on success
    """

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None


class LoginResponse(ApiResponse):
    """Envelope for a successful login."""

    user: AdminIdentity | None = None
