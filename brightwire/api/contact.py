"""Contact form API endpoint.

This module implements the public contact form submission endpoint. Validation
and storage live in the submission service; errors it raises are translated
by the application's exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from brightwire.api.dependencies import get_service
from brightwire.api.models import ApiResponse, SubmissionDraft
from brightwire.api.responses import envelope
from brightwire.api.service import SubmissionService

router = APIRouter(prefix="/api", tags=["contact"])


@router.post(
    "/contact",
    response_model=ApiResponse,
    responses={
        200: {
            "description": "Contact form submitted successfully",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Contact form submitted successfully",
                    }
                }
            },
        },
        400: {
            "description": "Missing fields or malformed email",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Missing required fields"}
                }
            },
        },
        500: {"description": "The submission could not be stored"},
    },
    summary="Submit the contact form",
    description="""
    Submit an enquiry with name, email, optional phone, service and message.

    **Validation Rules:**
    - name, email, service and message are required and must not be empty
    - email must look like `local@domain.tld`
    """,
)
async def submit_contact_form(
    draft: SubmissionDraft,
    service: Annotated[SubmissionService, Depends(get_service)],
) -> JSONResponse:
    """Validate and store a contact form submission."""
    await service.submit(draft)
    return envelope(ApiResponse(success=True, message="Contact form submitted successfully"))
