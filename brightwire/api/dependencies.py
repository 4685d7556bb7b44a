"""Request-scoped accessors for objects built by the application factory."""

from fastapi import Request

from brightwire.api.auth import CredentialCheck
from brightwire.api.service import SubmissionService


def get_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


def get_credential_check(request: Request) -> CredentialCheck:
    return request.app.state.credential_check
