"""Error taxonomy for the submission service and credential check.

Each error carries the HTTP status the boundary answers with and a message
that is safe to return to the caller.
"""

from fastapi import status


class BrightwireError(Exception):
    """Base class for errors surfaced through the HTTP boundary.

    Attributes:
        message: Caller-safe description of the failure
        status_code: HTTP status code the boundary responds with
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BrightwireError):
    """Malformed or missing caller input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(BrightwireError):
    """Credential mismatch."""

    status_code = status.HTTP_401_UNAUTHORIZED


class StoreError(BrightwireError):
    """The row store failed or answered with an error payload."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
