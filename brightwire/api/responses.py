"""JSON rendering of the response envelope."""

from fastapi import status
from fastapi.responses import JSONResponse

from brightwire.api.models import ApiResponse


def envelope(body: ApiResponse, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Render a response envelope, leaving out unset top-level fields.

    Nested None values (a submission without a phone) are kept as null.
    """
    content = body.model_dump(mode="json", by_alias=True)
    return JSONResponse(
        status_code=status_code,
        content={key: value for key, value in content.items() if value is not None},
    )


def error_response(status_code: int, error: str) -> JSONResponse:
    return envelope(ApiResponse(success=False, error=error), status_code=status_code)
