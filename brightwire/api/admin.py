"""Admin back-office endpoints.

Login, submission listing, dashboard statistics and status updates.

These routes perform no server-side authorization: the login endpoint only
checks credentials, and the dashboard keeps its own "logged in" marker. Anyone
who knows the paths can call them directly. Put an authenticating proxy in
front of /api/admin before exposing the service publicly.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from brightwire.api.auth import CredentialCheck
from brightwire.api.dependencies import get_credential_check, get_service
from brightwire.api.models import (
    ApiResponse,
    LoginRequest,
    LoginResponse,
    StatusUpdateRequest,
)
from brightwire.api.responses import envelope
from brightwire.api.service import SubmissionService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing"},
        401: {"description": "Invalid credentials"},
    },
    summary="Check admin credentials",
)
async def login(
    credentials: LoginRequest,
    credential_check: Annotated[CredentialCheck, Depends(get_credential_check)],
) -> JSONResponse:
    """Check the admin email/password pair. No session or token is issued."""
    identity = credential_check.authenticate(credentials.email, credentials.password)
    return envelope(LoginResponse(success=True, message="Login successful", user=identity))


@router.get(
    "/submissions",
    response_model=ApiResponse,
    summary="List all contact submissions",
    description="All submissions, newest first. There is no pagination.",
)
async def list_submissions(
    service: Annotated[SubmissionService, Depends(get_service)],
) -> JSONResponse:
    submissions = await service.list_submissions()
    return envelope(ApiResponse(success=True, data=submissions))


@router.get(
    "/stats",
    response_model=ApiResponse,
    summary="Dashboard statistics",
    description="Total submissions, submissions in the last seven days, and the most requested service.",
)
async def get_stats(
    service: Annotated[SubmissionService, Depends(get_service)],
) -> JSONResponse:
    stats = await service.stats()
    return envelope(ApiResponse(success=True, data=stats))


@router.patch(
    "/submissions/{submission_id}/status",
    response_model=ApiResponse,
    responses={400: {"description": "Invalid status"}},
    summary="Update a submission's status",
)
async def update_submission_status(
    submission_id: Annotated[int, Path(description="Submission id")],
    update: StatusUpdateRequest,
    service: Annotated[SubmissionService, Depends(get_service)],
) -> JSONResponse:
    """Set status to new, read or processed. An unknown id is a silent no-op."""
    await service.update_status(submission_id, update.status)
    return envelope(ApiResponse(success=True, message="Status updated successfully"))
